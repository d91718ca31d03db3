"""Application service: Audit Product use case (query)."""

from __future__ import annotations

from candleshop.domain.exceptions import EntityNotFoundError
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.catalog_audit import audit_product


class AuditProductHandler:

    def __init__(self, product_repo: ProductRepository, option_repo: OptionRepository) -> None:
        self._product_repo = product_repo
        self._option_repo = option_repo

    def handle(self, product_id: str | None = None) -> dict[str, list[str]]:
        """Return product name -> problems, for one product or the whole catalog."""
        if product_id is not None:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            products = [product]
        else:
            products = self._product_repo.list_all()
        return {p.name: audit_product(p, self._option_repo) for p in products}
