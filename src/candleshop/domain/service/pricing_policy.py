"""Order pricing policy: tax and shipping applied to a cart subtotal.

The rates are store-wide policy, not per product or region.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from candleshop.domain.model.order import OrderTotals
from candleshop.domain.model.value_objects import Money

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
TAX_RATE = Decimal("0.08")
FLAT_SHIPPING = Money(Decimal("5.99"))
FREE_SHIPPING_THRESHOLD = Money(Decimal("50.00"))


def shipping_for(subtotal: Money) -> Money:
    """Free strictly above the threshold, flat fee otherwise."""
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return Money.zero(subtotal.currency)
    return FLAT_SHIPPING


def compute_order_totals(subtotal: Money) -> OrderTotals:
    tax = subtotal.apply_rate(TAX_RATE)
    shipping = shipping_for(subtotal)
    total = (subtotal + tax + shipping).rounded()
    return OrderTotals(subtotal=subtotal, tax=tax, shipping=shipping, total=total)


@dataclass(frozen=True)
class ShippingQuote:
    shipping: Money
    free_shipping_threshold: Money
    amount_to_free_shipping: Money


def quote_shipping(subtotal: Money) -> ShippingQuote:
    if subtotal < FREE_SHIPPING_THRESHOLD:
        remaining = (FREE_SHIPPING_THRESHOLD - subtotal).rounded()
    else:
        remaining = Money.zero(subtotal.currency)
    return ShippingQuote(
        shipping=shipping_for(subtotal),
        free_shipping_threshold=FREE_SHIPPING_THRESHOLD,
        amount_to_free_shipping=remaining,
    )
