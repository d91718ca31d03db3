"""Application service: Get Cart use case.

Also home of the helpers every cart use case shares for finding the
caller's cart: by user id when authenticated, by guest token otherwise.
"""

from __future__ import annotations

from datetime import timedelta

from candleshop.application.dto import Caller
from candleshop.domain.exceptions import EntityNotFoundError
from candleshop.domain.model.cart import DEFAULT_RETENTION, Cart
from candleshop.domain.repository.cart_repository import CartRepository


def find_cart(cart_repo: CartRepository, caller: Caller) -> Cart | None:
    if caller.user_id is not None:
        return cart_repo.get_by_user(caller.user_id)
    if caller.guest_id is not None:
        return cart_repo.get_by_guest(caller.guest_id)
    return None


def require_cart(cart_repo: CartRepository, caller: Caller) -> Cart:
    cart = find_cart(cart_repo, caller)
    if cart is None:
        raise EntityNotFoundError("Cart not found")
    return cart


def find_or_create_cart(
    cart_repo: CartRepository,
    caller: Caller,
    retention: timedelta = DEFAULT_RETENTION,
) -> Cart:
    caller.require_identity()
    cart = find_cart(cart_repo, caller)
    if cart is not None:
        return cart
    if caller.user_id is not None:
        cart = Cart.for_user(caller.user_id, retention)
    else:
        cart = Cart.for_guest(caller.guest_id, retention)  # type: ignore[arg-type]
    cart_repo.save(cart)
    return cart


class GetCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        retention: timedelta = DEFAULT_RETENTION,
    ) -> None:
        self._cart_repo = cart_repo
        self._retention = retention

    def handle(self, caller: Caller) -> Cart:
        return find_or_create_cart(self._cart_repo, caller, self._retention)
