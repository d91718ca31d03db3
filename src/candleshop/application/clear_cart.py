"""Application service: Clear Cart use case."""

from __future__ import annotations

from candleshop.application.dto import Caller
from candleshop.application.get_cart import require_cart
from candleshop.domain.model.cart import Cart
from candleshop.domain.repository.cart_repository import CartRepository


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, caller: Caller) -> Cart:
        cart = require_cart(self._cart_repo, caller)
        cart.clear()
        self._cart_repo.save(cart)
        return cart
