"""Soft validation of catalog entries.

A product that is customizable for an attribute should reference at
least one option of that kind a customer can actually pick.  This is
advisory: problems are reported, never raised, and nothing stops an
administrator from saving such a product.
"""

from __future__ import annotations

from candleshop.domain.model.option import OptionKind
from candleshop.domain.model.product import Product
from candleshop.domain.repository.option_repository import OptionRepository


def audit_product(product: Product, option_repo: OptionRepository) -> list[str]:
    problems: list[str] = []

    if product.base_price.is_zero:
        problems.append("Base price must be greater than zero")

    for kind in OptionKind:
        ids = product.allowed_ids(kind)
        if not ids:
            continue
        options = [option_repo.get(kind, option_id) for option_id in ids]
        missing = [option_id for option_id, option in zip(ids, options) if option is None]
        for option_id in missing:
            problems.append(f"References unknown {kind.value} {option_id}")
        if not any(option is not None and option.is_selectable for option in options):
            problems.append(f"Product must have at least one available {kind.value} option")

    if not product.in_stock:
        problems.append("Product is out of stock")

    return problems
