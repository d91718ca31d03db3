"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from candleshop.application.add_product import AddProductHandler
from candleshop.application.audit_product import AuditProductHandler
from candleshop.application.set_inventory import SetInventoryHandler
from candleshop.application.update_product import UpdateProductHandler
from candleshop.domain.exceptions import DomainException
from candleshop.domain.model.option import OptionKind


def _parse_ids(raw: str | None) -> list[str] | None:
    """Parse 'id1,id2' into a list; None when the flag was not given."""
    if raw is None:
        return None
    return [part.strip() for part in raw.split(",") if part.strip()]


def _option_flags(scents: str | None, colors: str | None, sizes: str | None) -> dict[OptionKind, list[str]]:
    options: dict[OptionKind, list[str]] = {}
    for kind, raw in ((OptionKind.SCENT, scents), (OptionKind.COLOR, colors), (OptionKind.SIZE, sizes)):
        ids = _parse_ids(raw)
        if ids is not None:
            options[kind] = ids
    return options


def _option_params(func):
    func = click.option("--sizes", default=None, help="Comma-separated size IDs.")(func)
    func = click.option("--colors", default=None, help="Comma-separated color IDs.")(func)
    func = click.option("--scents", default=None, help="Comma-separated scent IDs.")(func)
    return func


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Base price, e.g. 19.99.")
@click.option("--description", default="", help="Product description.")
@click.option("--inventory", default=0, type=int, show_default=True, help="Units in stock.")
@click.option("--category", default="candles", show_default=True)
@click.option("--low-stock", "low_stock", default=None, type=int, help="Low-stock threshold (default 5).")
@_option_params
@click.pass_obj
def product_add(
    container,
    name: str,
    price: str,
    description: str,
    inventory: int,
    category: str,
    low_stock: int | None,
    scents: str | None,
    colors: str | None,
    sizes: str | None,
) -> None:
    """Add a product to the catalog."""
    handler = AddProductHandler(product_repo=container.products, option_repo=container.options)
    try:
        product = handler.handle(
            name, price, description=description, inventory=inventory,
            options=_option_flags(scents, colors, sizes), category=category,
            low_stock_threshold=low_stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' added (id={product.id})")


@click.command("list")
@click.pass_obj
def product_list(container) -> None:
    """List all products with prices and stock."""
    products = container.products.list_all()
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26}{'Name':<24} {'Price':>10} {'Stock':>7} {'S/C/Z':>8}")
    click.echo("-" * 77)
    for p in products:
        counts = f"{len(p.scent_ids)}/{len(p.color_ids)}/{len(p.size_ids)}"
        click.echo(f"{p.id:<26}{p.name:<24} {str(p.base_price):>10} {p.inventory:>7} {counts:>8}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New base price.")
@click.option("--description", default=None, help="New description.")
@_option_params
@click.pass_obj
def product_update(
    container,
    product_id: str,
    price: str | None,
    description: str | None,
    scents: str | None,
    colors: str | None,
    sizes: str | None,
) -> None:
    """Update a product's price, description or offered options."""
    handler = UpdateProductHandler(product_repo=container.products, option_repo=container.options)
    try:
        product = handler.handle(
            product_id, new_price=price,
            options=_option_flags(scents, colors, sizes), description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' updated (price={product.base_price})")


@click.command("inventory")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.option("--low-stock", "low_stock", default=None, type=int, help="Low-stock threshold.")
@click.pass_obj
def product_inventory(container, product_id: str, quantity: int, low_stock: int | None) -> None:
    """Set inventory level for a product."""
    handler = SetInventoryHandler(product_repo=container.products)
    try:
        product = handler.handle(product_id, quantity, low_stock_threshold=low_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Inventory for '{product.name}' set to {product.inventory} "
        f"(low stock at {product.low_stock_threshold})"
    )


@click.command("audit")
@click.option("--id", "product_id", default=None, help="Audit a single product.")
@click.pass_obj
def product_audit(container, product_id: str | None) -> None:
    """Report products that cannot be sold as configured."""
    handler = AuditProductHandler(product_repo=container.products, option_repo=container.options)
    try:
        report = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    failing = {name: problems for name, problems in report.items() if problems}
    if not failing:
        click.echo("All products OK.")
        return
    for name, problems in failing.items():
        click.echo(f"{name}:")
        for problem in problems:
            click.echo(f"  - {problem}")
    click.get_current_context().exit(1)
