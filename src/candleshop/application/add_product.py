"""Application service: Add Product use case."""

from __future__ import annotations

from candleshop.domain.exceptions import ConflictError, ValidationError
from candleshop.domain.model.identifiers import new_id
from candleshop.domain.model.option import OptionKind
from candleshop.domain.model.product import Product
from candleshop.domain.model.value_objects import Money
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository


def check_option_ids(option_repo: OptionRepository, kind: OptionKind, option_ids: list[str]) -> None:
    """Every referenced option must exist in the catalog of its kind."""
    unknown = [option_id for option_id in option_ids if option_repo.get(kind, option_id) is None]
    if unknown:
        raise ValidationError.for_field(
            kind.plural, f"Unknown {kind.value} ids: {', '.join(unknown)}"
        )


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, option_repo: OptionRepository) -> None:
        self._product_repo = product_repo
        self._option_repo = option_repo

    def handle(
        self,
        name: str,
        price: str,
        description: str = "",
        inventory: int = 0,
        options: dict[OptionKind, list[str]] | None = None,
        category: str = "candles",
        low_stock_threshold: int | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError.for_field("name", "Product name is required")

        if self._product_repo.get_by_name(name.strip()) is not None:
            raise ConflictError(f"Product '{name.strip()}' already exists")

        product = Product(
            id=new_id(),
            name=name.strip(),
            base_price=Money.of(price),
            description=description,
            category=category,
        )
        product.set_inventory(inventory)
        if low_stock_threshold is not None:
            product.set_low_stock_threshold(low_stock_threshold)
        for kind, option_ids in (options or {}).items():
            check_option_ids(self._option_repo, kind, option_ids)
            product.set_options(kind, option_ids)

        self._product_repo.save(product)
        return product
