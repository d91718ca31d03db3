"""Cart aggregate — a mutable, pre-checkout collection of line items.

A cart belongs to exactly one owner: an authenticated user or an
anonymous guest identified by an opaque token.  The total is recomputed
from scratch after every mutation; there is no incremental path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from candleshop.domain.exceptions import EntityNotFoundError, ValidationError
from candleshop.domain.model.combination import Combination
from candleshop.domain.model.identifiers import new_id
from candleshop.domain.model.value_objects import Money, Quantity

DEFAULT_RETENTION = timedelta(days=7)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartLineItem:
    """One product/combination pair in the cart.

    ``unit_price`` is the customized price computed when the item was
    added.  It is not recomputed when the catalog changes.
    """

    id: str
    product_id: str
    quantity: Quantity
    combination: Combination
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def matches(self, product_id: str, combination: Combination) -> bool:
        return self.product_id == product_id and self.combination == combination


@dataclass
class Cart:
    """Aggregate root for shopping carts.

    Use ``Cart.for_user()`` / ``Cart.for_guest()`` for new carts.  The
    ``__init__`` is kept simple so repositories can reconstitute
    persisted carts as-is.
    """

    id: str
    user_id: str | None = None
    guest_id: str | None = None
    items: list[CartLineItem] = field(default_factory=list)
    total_price: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    expires_at: datetime = field(default_factory=lambda: _now() + DEFAULT_RETENTION)
    retention: timedelta = DEFAULT_RETENTION

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def for_user(user_id: str, retention: timedelta = DEFAULT_RETENTION) -> Cart:
        if not user_id:
            raise ValidationError("A user cart needs a user id")
        now = _now()
        return Cart(
            id=new_id(), user_id=user_id, created_at=now, updated_at=now,
            expires_at=now + retention, retention=retention,
        )

    @staticmethod
    def for_guest(guest_id: str, retention: timedelta = DEFAULT_RETENTION) -> Cart:
        if not guest_id:
            raise ValidationError("A guest cart needs a guest id")
        now = _now()
        return Cart(
            id=new_id(), guest_id=guest_id, created_at=now, updated_at=now,
            expires_at=now + retention, retention=retention,
        )

    # --- Mutations ------------------------------------------------------------

    def add_item(
        self,
        product_id: str,
        quantity: int,
        combination: Combination,
        unit_price: Money,
    ) -> CartLineItem:
        """Add a line, or grow the line with the same product and combination."""
        qty = Quantity(quantity)
        for item in self.items:
            if item.matches(product_id, combination):
                item.quantity = Quantity(item.quantity.value + qty.value)
                self._touch()
                return item

        item = CartLineItem(
            id=new_id(),
            product_id=product_id,
            quantity=qty,
            combination=combination,
            unit_price=unit_price,
        )
        self.items.append(item)
        self._touch()
        return item

    def update_quantity(self, item_id: str, quantity: int) -> CartLineItem:
        item = self.find_item(item_id)
        item.quantity = Quantity(quantity)
        self._touch()
        return item

    def remove_item(self, item_id: str) -> None:
        item = self.find_item(item_id)
        self.items.remove(item)
        self._touch()

    def clear(self) -> None:
        self.items = []
        self._touch()

    def recalculate(self) -> Money:
        """Recompute ``total_price`` from the current items."""
        total = Money.zero()
        for item in self.items:
            total = total + item.line_total
        self.total_price = total
        return total

    # --- Queries --------------------------------------------------------------

    def find_item(self, item_id: str) -> CartLineItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise EntityNotFoundError("Cart item not found")

    def quantity_of(self, product_id: str, combination: Combination) -> int:
        for item in self.items:
            if item.matches(product_id, combination):
                return item.quantity.value
        return 0

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_items(self) -> int:
        return sum(item.quantity.value for item in self.items)

    def is_owned_by(self, user_id: str | None = None, guest_id: str | None = None) -> bool:
        if self.user_id is not None:
            return self.user_id == user_id
        return guest_id is not None and self.guest_id == guest_id

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or _now()) >= self.expires_at

    # --- Internal helpers -----------------------------------------------------

    def _touch(self) -> None:
        self.recalculate()
        self.updated_at = _now()
        self.expires_at = self.updated_at + self.retention
