"""Order aggregate — the immutable record of a checkout.

An order is created once from a cart.  Its line items carry full
product and option snapshots, so catalog edits never change history.
Afterwards only the status (forward only), the tracking number and the
payment status may change.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from candleshop.domain.exceptions import ValidationError
from candleshop.domain.model.address import Address
from candleshop.domain.model.product import ProductSnapshot
from candleshop.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


# Allowed forward transitions; anything not listed is rejected.
_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    tax: Money
    shipping: Money
    total: Money


@dataclass
class PaymentDetails:
    method: str
    transaction_id: str
    status: PaymentStatus = PaymentStatus.PENDING

    def __post_init__(self) -> None:
        if not self.method or not self.method.strip():
            raise ValidationError.for_field("paymentDetails.method", "Payment method is required")
        if not self.transaction_id or not self.transaction_id.strip():
            raise ValidationError.for_field(
                "paymentDetails.transactionId", "Payment transaction id is required"
            )


@dataclass(frozen=True)
class OrderLineItem:
    """A cart line frozen at checkout time."""

    product_id: str
    product_snapshot: ProductSnapshot
    quantity: Quantity
    customizations: dict[str, dict | None]
    unit_price: Money  # locked at add-to-cart time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


def generate_order_number(now: datetime | None = None, rng: random.Random | None = None) -> str:
    """``ORD-YYMMDD-NNNN`` with a random four-digit suffix."""
    now = now or datetime.now(timezone.utc)
    suffix = (rng or random).randint(0, 9999)
    return f"ORD-{now:%y%m%d}-{suffix:04d}"


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders; ``__init__`` stays simple so
    the repository can reconstitute persisted orders without
    re-validating.
    """

    id: str
    order_number: str
    email: str
    items: list[OrderLineItem]
    shipping_address: Address
    billing_address: Address
    payment: PaymentDetails
    totals: OrderTotals
    user_id: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    tracking_number: str | None = None
    carrier: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        id: str,
        order_number: str,
        email: str,
        items: list[OrderLineItem],
        shipping_address: Address,
        billing_address: Address,
        payment: PaymentDetails,
        totals: OrderTotals,
        user_id: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not email or "@" not in email:
            raise ValidationError.for_field("email", "A valid email address is required")
        if not items:
            raise ValidationError("Cannot checkout with empty cart")
        return Order(
            id=id,
            order_number=order_number,
            email=email.strip(),
            items=list(items),
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment=payment,
            totals=totals,
            user_id=user_id,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, status: OrderStatus) -> bool:
        return status in _TRANSITIONS[self.status]

    def advance_to(self, status: OrderStatus, tracking_number: str | None = None) -> None:
        """Move the order forward.

        A tracking number is only recorded when the order ships.
        """
        if status == self.status:
            raise ValidationError(f"Order is already {status.value}")
        if not self.can_transition_to(status):
            raise ValidationError(
                f"Cannot change order status from {self.status.value} to {status.value}"
            )
        self.status = status
        if status == OrderStatus.SHIPPED and tracking_number:
            self.tracking_number = tracking_number
        self.updated_at = datetime.now(timezone.utc)

    def update_tracking(self, tracking_number: str, carrier: str | None = None) -> None:
        """Record shipment tracking.

        A pending or processing order is marked shipped at the same time;
        a cancelled order cannot carry tracking.
        """
        if not tracking_number or not tracking_number.strip():
            raise ValidationError.for_field("trackingNumber", "Tracking number is required")
        if self.status == OrderStatus.CANCELLED:
            raise ValidationError("Cannot add tracking to a cancelled order")
        if self.status in (OrderStatus.PENDING, OrderStatus.PROCESSING):
            self.advance_to(OrderStatus.SHIPPED)
        self.tracking_number = tracking_number.strip()
        if carrier and carrier.strip():
            self.carrier = carrier.strip()
        self.updated_at = datetime.now(timezone.utc)

    def mark_payment(self, status: PaymentStatus) -> None:
        if self.payment.status == PaymentStatus.COMPLETED and status == PaymentStatus.COMPLETED:
            raise ValidationError("Payment is already completed")
        if self.payment.status == PaymentStatus.REFUNDED:
            raise ValidationError("Payment has been refunded")
        self.payment.status = status
        self.updated_at = datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def total_items(self) -> int:
        return sum(item.quantity.value for item in self.items)

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.user_id == user_id
