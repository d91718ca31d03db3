"""Data transfer objects passed between the HTTP/CLI adapters and the use cases."""

from __future__ import annotations

from dataclasses import dataclass, field

from candleshop.domain.exceptions import AuthenticationError, ForbiddenError, ValidationError
from candleshop.domain.model.order import Order
from candleshop.domain.model.product import Product
from candleshop.domain.model.value_objects import Money


@dataclass(frozen=True)
class Caller:
    """Who is making the request.

    Authentication happens upstream; the adapters only pass on the
    resulting user id and role, or the guest token from the cookie.
    """

    user_id: str | None = None
    guest_id: str | None = None
    role: str = "customer"

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == "admin"

    def require_user(self) -> str:
        if self.user_id is None:
            raise AuthenticationError("Authentication required")
        return self.user_id

    def require_admin(self) -> None:
        self.require_user()
        if not self.is_admin:
            raise ForbiddenError("Administrator role required")

    def require_identity(self) -> None:
        if self.user_id is None and self.guest_id is None:
            raise ValidationError("A user or guest identity is required")


@dataclass(frozen=True)
class CustomizationCheckDTO:
    """Output of the validate-customization use case."""

    is_valid: bool
    message: str
    price: str  # decimal string, e.g. "22.49"


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: everything the customer submits at checkout."""

    cart_id: str
    email: str
    shipping_address: dict
    billing_address: dict
    payment_method: str
    transaction_id: str


@dataclass(frozen=True)
class TotalsDTO:
    subtotal: str
    tax: str
    shipping: str
    total: str


@dataclass(frozen=True)
class CheckoutPreviewDTO:
    """Output: non-mutating checkout validation."""

    valid: bool
    cart_id: str
    total_items: int
    totals: TotalsDTO
    inventory_errors: list[str] = field(default_factory=list)
    address_errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OrderReceiptDTO:
    """Output: summary returned after a successful checkout."""

    id: str
    order_number: str
    email: str
    total: str
    status: str


@dataclass(frozen=True)
class DashboardDTO:
    """Output: back-office overview of the store."""

    product_count: int
    order_count: int
    today_revenue: Money
    monthly_revenue: Money
    recent_orders: list[Order]
    low_stock_products: list[Product]
