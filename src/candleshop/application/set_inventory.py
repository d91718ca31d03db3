"""Application service: Set Inventory use case."""

from __future__ import annotations

from candleshop.domain.exceptions import EntityNotFoundError
from candleshop.domain.model.product import Product
from candleshop.domain.repository.product_repository import ProductRepository


class SetInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self, product_id: str, quantity: int, low_stock_threshold: int | None = None
    ) -> Product:
        """Set the units in stock and, optionally, the low-stock threshold."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.set_inventory(quantity)
        if low_stock_threshold is not None:
            product.set_low_stock_threshold(low_stock_threshold)
        self._product_repo.save(product)
        return product
