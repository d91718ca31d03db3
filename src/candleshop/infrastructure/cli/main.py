"""Administrative command line.

Every command runs against the configured data directory; the store is
opened when the group starts and closed when the command finishes.
"""

from __future__ import annotations

from pathlib import Path

import click

from candleshop.infrastructure.bootstrap import open_container
from candleshop.infrastructure.cli.cart_commands import cart_purge
from candleshop.infrastructure.cli.option_commands import option_add, option_list, option_update
from candleshop.infrastructure.cli.order_commands import order_list, order_show, order_status
from candleshop.infrastructure.cli.product_commands import (
    product_add,
    product_audit,
    product_inventory,
    product_list,
    product_update,
)
from candleshop.infrastructure.cli.report_commands import report
from candleshop.infrastructure.config import get_settings
from candleshop.infrastructure.logging_setup import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON collections (overrides CANDLESHOP_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """Candle Shop administration"""
    overrides = {"data_dir": data_dir} if data_dir is not None else {}
    settings = get_settings(**overrides)
    configure_logging(settings)
    ctx.obj = ctx.with_resource(open_container(settings))


@cli.group()
def option() -> None:
    """Manage scents, colors and sizes."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def order() -> None:
    """Inspect and advance orders."""


@cli.group()
def cart() -> None:
    """Cart maintenance."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to CANDLESHOP_HOST).")
@click.option("--port", default=None, type=int, help="Port (defaults to CANDLESHOP_PORT).")
@click.pass_obj
def serve(container, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = container.settings
    # The app opens its own store; release ours first.
    container.store.close()
    uvicorn.run(
        "candleshop.infrastructure.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
    )


# Register subcommands
option.add_command(option_add)
option.add_command(option_list)
option.add_command(option_update)
product.add_command(product_add)
product.add_command(product_audit)
product.add_command(product_inventory)
product.add_command(product_list)
product.add_command(product_update)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
cart.add_command(cart_purge)
cli.add_command(report)
