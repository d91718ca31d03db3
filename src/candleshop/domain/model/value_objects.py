"""Money and Quantity: the two value objects every price and cart line uses.

Both are frozen dataclasses compared by value.  They refuse to hold an
invalid value (negative money, a quantity below one), so code that
receives one never has to check again.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from candleshop.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@functools.total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative amount in one currency.

    Amounts are Decimal so that 15.99 + 2.00 + 1.50 + 3.00 is exactly
    22.49.  Intermediate values keep full precision; ``rounded()`` and
    ``apply_rate()`` bring them back to whole cents.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money needs a Decimal amount, not {type(self.amount).__name__}"
            )
        if self.amount.is_signed() and self.amount != 0:
            raise ValidationError(f"Money cannot be negative ({self.amount})")

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same_currency(other).amount, self.currency)

    def __radd__(self, other: int | Money) -> Money:
        # Lets sum() start from its default 0.
        if other == 0:
            return self
        return self + other  # type: ignore[operator]

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._same_currency(other).amount
        if difference < 0:
            raise ValidationError(f"Subtracting {other} from {self} would go negative")
        return Money(difference, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Money can only be multiplied by an int, not {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same_currency(other).amount

    def rounded(self) -> Money:
        """Round half-up to whole cents."""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def apply_rate(self, rate: Decimal) -> Money:
        """``self * rate`` rounded to cents, e.g. a tax amount."""
        return Money(self.amount * rate, self.currency).rounded()

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def __float__(self) -> float:
        return float(self.rounded().amount)

    def _same_currency(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | int | float | Decimal, currency: str = "USD") -> Money:
        """Build Money from anything Decimal can parse via ``str()``."""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        return Money(value, currency)

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0.00"), currency)


@dataclass(frozen=True)
class Quantity:
    """How many units of a cart or order line; always at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}",
                {"quantity": "Quantity must be an integer"},
            )
        if self.value < 1:
            raise ValidationError(
                "Quantity must be at least 1", {"quantity": "Quantity must be at least 1"}
            )

    def __str__(self) -> str:
        return str(self.value)
