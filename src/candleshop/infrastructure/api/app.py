"""FastAPI application factory.

``create_app()`` reads no environment at import time; run it with
``uvicorn --factory candleshop.infrastructure.api.app:create_app`` or via
``candleshop serve``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from candleshop.infrastructure.api.errors import register_exception_handlers
from candleshop.infrastructure.api.routes import cart, checkout, customization, orders
from candleshop.infrastructure.bootstrap import open_container
from candleshop.infrastructure.config import Settings, get_settings
from candleshop.infrastructure.logging_setup import configure_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        with open_container(settings) as container:
            app.state.container = container
            yield
        app.state.container = None

    app = FastAPI(title="Candle Shop API", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for module in (customization, cart, checkout, orders):
        app.include_router(module.router)

    @app.get("/health")
    def health():
        return {"success": True, "status": "ok", "environment": settings.environment}

    return app
