"""Domain service: merge a guest cart into a user's cart at login.

Guest items are appended one by one.  Each item is checked again
against the current catalog; items that can no longer be sold are not
carried over.  Rather than disappearing silently, every dropped item is
logged and reported back in ``MergeResult.skipped``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from candleshop.domain.model.cart import Cart, CartLineItem
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.customization_validator import (
    CustomizationError,
    CustomizationValidator,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SkippedItem:
    product_id: str
    quantity: int
    reason: str


@dataclass
class MergeResult:
    cart: Cart
    merged: int = 0
    skipped: list[SkippedItem] = field(default_factory=list)


class CartMergeService:

    def __init__(
        self,
        product_repo: ProductRepository,
        validator: CustomizationValidator,
    ) -> None:
        self._product_repo = product_repo
        self._validator = validator

    def merge(self, guest_cart: Cart, user_cart: Cart) -> MergeResult:
        result = MergeResult(cart=user_cart)

        for item in guest_cart.items:
            reason = self._merge_item(item, user_cart)
            if reason is None:
                result.merged += 1
                continue
            skipped = SkippedItem(item.product_id, item.quantity.value, reason)
            result.skipped.append(skipped)
            logger.info(
                "merge_item_skipped",
                cart_id=user_cart.id,
                product_id=skipped.product_id,
                quantity=skipped.quantity,
                reason=reason,
            )

        return result

    def _merge_item(self, item: CartLineItem, user_cart: Cart) -> str | None:
        """Add ``item`` to ``user_cart``; return a skip reason or None."""
        product = self._product_repo.get_by_id(item.product_id)
        if product is None:
            return "Product no longer exists"
        if not product.in_stock:
            return "Product is out of stock"

        already_held = user_cart.quantity_of(item.product_id, item.combination)
        quantity = min(item.quantity.value, product.inventory - already_held)
        if quantity < 1:
            return "Insufficient inventory"

        try:
            self._validator.ensure_valid(item.product_id, item.combination)
        except CustomizationError as exc:
            return exc.message

        user_cart.add_item(item.product_id, quantity, item.combination, item.unit_price)
        return None
