"""Customization options: the scents, colors and sizes a candle can have.

Each kind is an independent catalog.  An option carries its own
availability flags and an additive price delta on top of a product's
base price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from candleshop.domain.exceptions import ValidationError
from candleshop.domain.model.value_objects import Money


class OptionKind(Enum):
    SCENT = "scent"
    COLOR = "color"
    SIZE = "size"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def plural(self) -> str:
        return f"{self.value}s"


@dataclass
class Option:
    """A selectable customization value.

    Options are never deleted while historical orders reference them;
    orders keep their own snapshot anyway, so retiring an option is done
    by clearing ``available``.
    """

    id: str
    kind: OptionKind
    name: str
    additional_price: Money = field(default_factory=Money.zero)
    available: bool = True
    in_stock: bool = True
    description: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def is_selectable(self) -> bool:
        return self.available and self.in_stock

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError.for_field("name", f"{self.kind.label} name is required")
        self.name = name.strip()

    def update_price(self, additional_price: Money) -> None:
        self.additional_price = additional_price

    def set_availability(self, available: bool | None = None, in_stock: bool | None = None) -> None:
        if available is not None:
            self.available = available
        if in_stock is not None:
            self.in_stock = in_stock

    def snapshot(self) -> dict:
        """Plain copy stored on order line items."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "additional_price": str(self.additional_price.amount),
            "attributes": dict(self.attributes),
        }
