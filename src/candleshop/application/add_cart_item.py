"""Application service: Add Cart Item use case.

Steps:
1. Check the quantity and load the product (404 if missing).
2. Check stock, counting what the cart already holds of the same line.
3. Validate the customization combination for the product.
4. Price the combination and add the line at that unit price.
"""

from __future__ import annotations

from datetime import timedelta

from candleshop.application.dto import Caller
from candleshop.application.get_cart import find_or_create_cart
from candleshop.domain.exceptions import ValidationError
from candleshop.domain.model.cart import DEFAULT_RETENTION, Cart
from candleshop.domain.model.combination import Combination
from candleshop.domain.repository.cart_repository import CartRepository
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.customization_validator import (
    CustomizationValidator,
    require_product,
)
from candleshop.domain.service.price_calculator import PriceCalculator


class AddCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        option_repo: OptionRepository,
        retention: timedelta = DEFAULT_RETENTION,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._validator = CustomizationValidator(option_repo, product_repo)
        self._calculator = PriceCalculator(option_repo, product_repo)
        self._retention = retention

    def handle(
        self,
        caller: Caller,
        product_id: str,
        quantity: int,
        combination: Combination,
    ) -> Cart:
        if not product_id:
            raise ValidationError.for_field("productId", "Product ID is required")
        if not isinstance(quantity, int) or quantity < 1:
            raise ValidationError.for_field("quantity", "Quantity must be at least 1")

        product = require_product(self._product_repo, product_id)
        product_id = product.id
        if not product.in_stock:
            raise ValidationError.for_field("productId", "Product is out of stock")

        cart = find_or_create_cart(self._cart_repo, caller, self._retention)

        wanted = cart.quantity_of(product_id, combination) + quantity
        if wanted > product.inventory:
            message = f"Only {product.inventory} items available"
            raise ValidationError.for_field("quantity", message)

        result = self._validator.validate(product_id, combination)
        if not result.is_valid:
            message = result.message or "Invalid customization options"
            raise ValidationError.for_field("customizations", message)

        quote = self._calculator.price(product_id, combination)
        cart.add_item(product_id, quantity, combination, quote.price)
        self._cart_repo.save(cart)
        return cart
