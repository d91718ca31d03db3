"""Domain service: customized unit price.

``price = base_price + sum(additional_price of each supplied option)``.

The calculator does not re-run validation.  An option id that cannot be
resolved contributes nothing; instead of dropping it silently the quote
records it in ``skipped`` and the miss is logged, so callers can tell a
full price from a partial one.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from candleshop.domain.model.combination import Combination
from candleshop.domain.model.option import OptionKind
from candleshop.domain.model.value_objects import Money
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.customization_validator import require_product

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PriceQuote:
    price: Money
    skipped: tuple[tuple[OptionKind, str], ...] = ()

    @property
    def error(self) -> str | None:
        if not self.skipped:
            return None
        names = ", ".join(f"{kind.value} {option_id}" for kind, option_id in self.skipped)
        return f"Unresolvable options ignored: {names}"


class PriceCalculator:

    def __init__(self, option_repo: OptionRepository, product_repo: ProductRepository) -> None:
        self._option_repo = option_repo
        self._product_repo = product_repo

    def price(self, product_id: str, combination: Combination) -> PriceQuote:
        product = require_product(self._product_repo, product_id)

        price = product.base_price
        skipped: list[tuple[OptionKind, str]] = []
        for kind, option_id in combination.selections():
            option = self._option_repo.get(kind, option_id)
            if option is None:
                skipped.append((kind, option_id))
                continue
            price = price + option.additional_price

        if skipped:
            logger.warning(
                "price_options_skipped",
                product_id=product_id,
                options=[f"{kind.value}:{option_id}" for kind, option_id in skipped],
            )
        return PriceQuote(price=price, skipped=tuple(skipped))
