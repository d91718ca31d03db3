"""FastAPI dependencies: the container and the caller's identity."""

from __future__ import annotations

from dataclasses import replace

from fastapi import Depends, Header, Request, Response

from candleshop.application.dto import Caller
from candleshop.domain.model.identifiers import new_guest_id
from candleshop.infrastructure.bootstrap import Container
from candleshop.infrastructure.config import Settings


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_caller(
    request: Request,
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dep),
) -> Caller:
    """Identity set by the upstream auth layer, plus the guest cookie."""
    guest_id = request.cookies.get(settings.guest_cookie_name)
    return Caller(
        user_id=x_user_id or None,
        guest_id=guest_id or None,
        role=(x_user_role or "customer").strip().lower(),
    )


def set_guest_cookie(response: Response, settings: Settings, guest_id: str) -> None:
    response.set_cookie(
        settings.guest_cookie_name,
        guest_id,
        max_age=settings.guest_cookie_max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


def ensure_identity(caller: Caller, response: Response, settings: Settings) -> Caller:
    """Give an anonymous caller a fresh guest id and hand it out as a cookie."""
    if caller.user_id is not None or caller.guest_id is not None:
        return caller
    guest_id = new_guest_id()
    set_guest_cookie(response, settings, guest_id)
    return replace(caller, guest_id=guest_id)
