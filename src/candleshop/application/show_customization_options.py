"""Application service: Show Customization Options use case (query)."""

from __future__ import annotations

from candleshop.domain.model.option import Option, OptionKind
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.customization_validator import require_product


class ShowCustomizationOptionsHandler:

    def __init__(
        self,
        option_repo: OptionRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._option_repo = option_repo
        self._product_repo = product_repo

    def handle(self, product_id: str) -> dict[OptionKind, list[Option]]:
        """Return the product's selectable options, grouped by kind.

        Options that are unavailable or out of stock are left out, as are
        ids the product references but the catalog no longer has.
        """
        product = require_product(self._product_repo, product_id)

        grouped: dict[OptionKind, list[Option]] = {}
        for kind in OptionKind:
            options = [self._option_repo.get(kind, option_id) for option_id in product.allowed_ids(kind)]
            grouped[kind] = [o for o in options if o is not None and o.is_selectable]
        return grouped
