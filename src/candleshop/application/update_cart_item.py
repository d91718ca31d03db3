"""Application service: Update / Remove Cart Item use cases."""

from __future__ import annotations

from candleshop.application.dto import Caller
from candleshop.application.get_cart import require_cart
from candleshop.domain.exceptions import EntityNotFoundError, ValidationError
from candleshop.domain.model.cart import Cart
from candleshop.domain.repository.cart_repository import CartRepository
from candleshop.domain.repository.product_repository import ProductRepository


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller, item_id: str, quantity: int) -> Cart:
        """Set a line's quantity, checked against current inventory."""
        if not isinstance(quantity, int) or quantity < 1:
            raise ValidationError.for_field("quantity", "Quantity must be at least 1")

        cart = require_cart(self._cart_repo, caller)
        item = cart.find_item(item_id)

        product = self._product_repo.get_by_id(item.product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")
        if product.inventory < quantity:
            message = f"Only {product.inventory} items available"
            raise ValidationError.for_field("quantity", message)

        cart.update_quantity(item_id, quantity)
        self._cart_repo.save(cart)
        return cart


class RemoveCartItemHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, caller: Caller, item_id: str) -> Cart:
        cart = require_cart(self._cart_repo, caller)
        cart.remove_item(item_id)
        self._cart_repo.save(cart)
        return cart
