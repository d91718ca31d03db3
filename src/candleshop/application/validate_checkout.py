"""Application services: checkout preview and shipping quote (queries).

Neither use case writes anything; they let the storefront show totals
and problems before the customer commits.
"""

from __future__ import annotations

from candleshop.application.dto import Caller, CheckoutPreviewDTO, TotalsDTO
from candleshop.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from candleshop.domain.model.address import order_address_errors
from candleshop.domain.model.cart import Cart
from candleshop.domain.model.order import OrderTotals
from candleshop.domain.repository.cart_repository import CartRepository
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.inventory_check import check_inventory
from candleshop.domain.service.pricing_policy import (
    ShippingQuote,
    compute_order_totals,
    quote_shipping,
)


def load_checkout_cart(cart_repo: CartRepository, cart_id: str, caller: Caller) -> Cart:
    """Load a cart by id and make sure the caller may check it out."""
    if not cart_id:
        raise ValidationError.for_field("cartId", "Cart ID is required")
    cart = cart_repo.get_by_id(cart_id)
    if cart is None:
        raise EntityNotFoundError("Cart not found")
    if not caller.is_admin and not cart.is_owned_by(caller.user_id, caller.guest_id):
        raise ForbiddenError("Not authorized to use this cart")
    return cart


def totals_dto(totals: OrderTotals) -> TotalsDTO:
    return TotalsDTO(
        subtotal=str(totals.subtotal.amount),
        tax=str(totals.tax.amount),
        shipping=str(totals.shipping.amount),
        total=str(totals.total.amount),
    )


class ValidateCheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(
        self,
        caller: Caller,
        cart_id: str,
        shipping_address: dict | None = None,
        billing_address: dict | None = None,
    ) -> CheckoutPreviewDTO:
        cart = load_checkout_cart(self._cart_repo, cart_id, caller)
        if cart.is_empty:
            raise ValidationError("Cannot checkout with empty cart")

        problems = check_inventory(self._product_repo, cart.items)

        # Addresses are optional here; only check them once both are given.
        address_errors: dict[str, str] = {}
        if shipping_address is not None and billing_address is not None:
            address_errors = order_address_errors(shipping_address, billing_address)

        return CheckoutPreviewDTO(
            valid=not problems and not address_errors,
            cart_id=cart.id,
            total_items=cart.total_items,
            totals=totals_dto(compute_order_totals(cart.total_price)),
            inventory_errors=[p.message for p in problems],
            address_errors=address_errors,
        )


class QuoteShippingHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, caller: Caller, cart_id: str) -> ShippingQuote:
        cart = load_checkout_cart(self._cart_repo, cart_id, caller)
        return quote_shipping(cart.total_price)
