"""Domain service: check that cart lines can still be fulfilled."""

from __future__ import annotations

from dataclasses import dataclass

from candleshop.domain.model.cart import CartLineItem
from candleshop.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryProblem:
    product_id: str
    requested: int
    available: int
    message: str


def check_inventory(
    product_repo: ProductRepository, lines: list[CartLineItem]
) -> list[InventoryProblem]:
    """Return one problem per product that cannot cover its requested quantity.

    Lines for the same product (different combinations) draw on the same
    inventory count, so quantities are summed per product first.
    """
    requested: dict[str, int] = {}
    for line in lines:
        requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity.value

    problems: list[InventoryProblem] = []
    for product_id, quantity in requested.items():
        product = product_repo.get_by_id(product_id)
        if product is None:
            problems.append(InventoryProblem(product_id, quantity, 0, "Product not found"))
        elif not product.in_stock:
            problems.append(
                InventoryProblem(product_id, quantity, 0, f"{product.name} is out of stock")
            )
        elif product.inventory < quantity:
            problems.append(
                InventoryProblem(
                    product_id,
                    quantity,
                    product.inventory,
                    f"Only {product.inventory} of {product.name} available",
                )
            )
    return problems
