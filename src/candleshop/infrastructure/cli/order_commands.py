"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from candleshop.application.dto import Caller
from candleshop.application.show_order import ListOrdersHandler, ShowOrderHandler
from candleshop.application.update_order_status import UpdateOrderStatusHandler, parse_status
from candleshop.domain.exceptions import DomainException
from candleshop.domain.model.order import OrderStatus

# The CLI acts with operator rights.
OPERATOR = Caller(user_id="cli", role="admin")


@click.command("list")
@click.option(
    "--status", type=click.Choice([s.value for s in OrderStatus]), default=None,
    help="Only orders in this status.",
)
@click.pass_obj
def order_list(container, status: str | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=container.orders)
    orders = handler.handle(
        OPERATOR, status=OrderStatus(status) if status else None, all_customers=True
    )
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<18}{'Status':<12}{'Items':>6} {'Total':>10}  Email")
    click.echo("-" * 70)
    for o in orders:
        click.echo(
            f"{o.order_number:<18}{o.status.value:<12}{o.total_items:>6} "
            f"{str(o.totals.total):>10}  {o.email}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(container, order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=container.orders)
    try:
        o = handler.handle(OPERATOR, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {o.order_number}  (status={o.status.value}, payment={o.payment.status.value})")
    click.echo(f"Email:    {o.email}")
    click.echo(f"Created:  {o.created_at.isoformat()}")
    if o.tracking_number:
        click.echo(f"Tracking: {o.tracking_number}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in o.items:
        chosen = ", ".join(
            snap["name"] for snap in item.customizations.values() if snap
        )
        label = item.product_snapshot.name + (f" ({chosen})" if chosen else "")
        click.echo(
            f"  {label:<24} {item.quantity.value:>5} {str(item.unit_price):>10} {str(item.line_total):>10}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Subtotal':<31} {str(o.totals.subtotal):>20}")
    click.echo(f"  {'Tax':<31} {str(o.totals.tax):>20}")
    click.echo(f"  {'Shipping':<31} {str(o.totals.shipping):>20}")
    click.echo(f"  {'Order Total':<31} {str(o.totals.total):>20}")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--to", "status", required=True, help="New status.")
@click.option("--tracking", default=None, help="Tracking number (for shipped).")
@click.option("--notify/--no-notify", default=True, show_default=True, help="Email the customer.")
@click.option("--message", default=None, help="Extra note for the customer.")
@click.pass_obj
def order_status(
    container,
    order_id: str,
    status: str,
    tracking: str | None,
    notify: bool,
    message: str | None,
) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(order_repo=container.orders, notifier=container.notifier)
    try:
        o = handler.handle(
            OPERATOR, order_id, parse_status(status),
            tracking_number=tracking, send_notification=notify, message=message,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {o.order_number} is now {o.status.value}.")
