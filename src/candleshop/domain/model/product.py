"""Product aggregate.

Products live independently of carts and orders.  A product declares
which options of each kind it offers; an empty set means the attribute
is not customizable for that product.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from candleshop.domain.exceptions import ValidationError
from candleshop.domain.model.identifiers import normalize_id
from candleshop.domain.model.option import OptionKind
from candleshop.domain.model.value_objects import Money

DEFAULT_LOW_STOCK_THRESHOLD = 5


@dataclass(frozen=True)
class ProductSnapshot:
    """Immutable copy of a product captured when an order is placed.

    Later catalog edits never reach historical orders.
    """

    id: str
    name: str
    description: str
    base_price: Money
    category: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "base_price": str(self.base_price.amount),
            "category": self.category,
        }

    @staticmethod
    def from_dict(raw: dict) -> ProductSnapshot:
        return ProductSnapshot(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            base_price=Money.of(raw["base_price"]),
            category=raw.get("category", ""),
        )


@dataclass
class Product:
    """A candle in the catalog.

    Kept as a mutable dataclass: price, membership and inventory are
    legitimate mutations on the aggregate.
    """

    id: str
    name: str
    base_price: Money
    description: str = ""
    scent_ids: list[str] = field(default_factory=list)
    color_ids: list[str] = field(default_factory=list)
    size_ids: list[str] = field(default_factory=list)
    inventory: int = 0
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    category: str = "candles"
    featured: bool = False

    @property
    def in_stock(self) -> bool:
        return self.inventory > 0

    @property
    def is_low_stock(self) -> bool:
        return self.inventory <= self.low_stock_threshold

    def allowed_ids(self, kind: OptionKind) -> list[str]:
        return getattr(self, f"{kind.value}_ids")

    def offers(self, kind: OptionKind, option_id: str) -> bool:
        return option_id in self.allowed_ids(kind)

    def is_customizable(self, kind: OptionKind) -> bool:
        return bool(self.allowed_ids(kind))

    def set_options(self, kind: OptionKind, option_ids: list[str]) -> None:
        # Preserve order, drop duplicates.
        ids = (normalize_id(option_id) for option_id in option_ids)
        setattr(self, f"{kind.value}_ids", list(dict.fromkeys(ids)))

    def update_price(self, new_price: Money) -> None:
        """Change the base price.

        Carts keep the unit price computed when the item was added and
        orders keep their snapshot, so neither is affected.
        """
        self.base_price = new_price

    def set_inventory(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError.for_field("inventory", "Inventory cannot be negative")
        self.inventory = quantity

    def set_low_stock_threshold(self, threshold: int) -> None:
        if threshold < 0:
            raise ValidationError.for_field(
                "lowStockThreshold", "Low stock threshold cannot be negative"
            )
        self.low_stock_threshold = threshold

    def snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(
            id=self.id,
            name=self.name,
            description=self.description,
            base_price=self.base_price,
            category=self.category,
        )
