"""CLI command for the back-office dashboard."""

from __future__ import annotations

import click

from candleshop.application.show_dashboard import ShowDashboardHandler


@click.command("report")
@click.pass_obj
def report(container) -> None:
    """Show store totals, revenue, recent orders and low stock."""
    dashboard = ShowDashboardHandler(
        product_repo=container.products, order_repo=container.orders
    ).handle()

    click.echo(f"Products:         {dashboard.product_count}")
    click.echo(f"Orders:           {dashboard.order_count}")
    click.echo(f"Revenue today:    {dashboard.today_revenue}")
    click.echo(f"Revenue (month):  {dashboard.monthly_revenue}")

    click.echo()
    click.echo("Recent orders:")
    if not dashboard.recent_orders:
        click.echo("  none")
    for o in dashboard.recent_orders:
        click.echo(
            f"  {o.order_number:<18}{o.status.value:<12}{str(o.totals.total):>10}  {o.email}"
        )

    click.echo()
    click.echo("Low stock:")
    if not dashboard.low_stock_products:
        click.echo("  none")
    for p in dashboard.low_stock_products:
        click.echo(f"  {p.name:<24}{p.inventory:>5} left (threshold {p.low_stock_threshold})")
