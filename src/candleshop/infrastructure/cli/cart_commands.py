"""CLI commands for cart maintenance."""

from __future__ import annotations

import click

from candleshop.application.purge_carts import PurgeExpiredCartsHandler


@click.command("purge")
@click.pass_obj
def cart_purge(container) -> None:
    """Delete carts whose retention period has passed."""
    removed = PurgeExpiredCartsHandler(cart_repo=container.carts).handle()
    click.echo(f"Removed {removed} expired cart(s).")
