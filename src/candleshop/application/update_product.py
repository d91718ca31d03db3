"""Application service: Update Product use case."""

from __future__ import annotations

from candleshop.application.add_product import check_option_ids
from candleshop.domain.exceptions import EntityNotFoundError
from candleshop.domain.model.option import OptionKind
from candleshop.domain.model.product import Product
from candleshop.domain.model.value_objects import Money
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository, option_repo: OptionRepository) -> None:
        self._product_repo = product_repo
        self._option_repo = option_repo

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        options: dict[OptionKind, list[str]] | None = None,
        description: str | None = None,
    ) -> Product:
        """Update price, option membership or description.

        This does NOT affect carts or orders: carts hold the unit price
        computed when the item was added, orders hold a snapshot.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if new_price is not None:
            product.update_price(Money.of(new_price))
        for kind, option_ids in (options or {}).items():
            check_option_ids(self._option_repo, kind, option_ids)
            product.set_options(kind, option_ids)
        if description is not None:
            product.description = description

        self._product_repo.save(product)
        return product
