"""CLI commands for the scent, color and size catalogs."""

from __future__ import annotations

import click

from candleshop.application.manage_options import AddOptionHandler, UpdateOptionHandler
from candleshop.domain.exceptions import DomainException
from candleshop.domain.model.option import OptionKind

KIND = click.Choice([k.value for k in OptionKind])


@click.command("add")
@click.option("--kind", required=True, type=KIND, help="Option kind.")
@click.option("--name", required=True, help="Display name.")
@click.option("--price", default="0", show_default=True, help="Price added to the base price.")
@click.option("--description", default="", help="Optional description.")
@click.option("--attr", "attrs", multiple=True, help="Extra attribute as key=value (repeatable).")
@click.pass_obj
def option_add(container, kind: str, name: str, price: str, description: str, attrs: tuple[str, ...]) -> None:
    """Add a customization option."""
    attributes: dict[str, str] = {}
    for pair in attrs:
        if "=" not in pair:
            raise click.BadParameter(f"Invalid attribute '{pair}'. Expected 'key=value'.")
        key, value = pair.split("=", 1)
        attributes[key.strip()] = value.strip()

    handler = AddOptionHandler(option_repo=container.options)
    try:
        created = handler.handle(
            OptionKind(kind), name, additional_price=price,
            description=description, attributes=attributes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{created.kind.label} '{created.name}' added (id={created.id})")


@click.command("list")
@click.option("--kind", type=KIND, default=None, help="Only list this kind.")
@click.pass_obj
def option_list(container, kind: str | None) -> None:
    """List customization options."""
    kinds = [OptionKind(kind)] if kind else list(OptionKind)
    for option_kind in kinds:
        options = container.options.list_by_kind(option_kind)
        click.echo(f"{option_kind.label}s:")
        if not options:
            click.echo("  (none)")
            continue
        for o in options:
            flags = []
            if not o.available:
                flags.append("unavailable")
            if not o.in_stock:
                flags.append("out of stock")
            suffix = f"  [{', '.join(flags)}]" if flags else ""
            click.echo(f"  {o.id}  {o.name:<20} +{o.additional_price}{suffix}")


@click.command("update")
@click.option("--kind", required=True, type=KIND, help="Option kind.")
@click.option("--id", "option_id", required=True, help="Option ID.")
@click.option("--name", default=None, help="New display name.")
@click.option("--price", default=None, help="New additional price.")
@click.option("--available/--unavailable", default=None, help="Offer or retire the option.")
@click.option("--in-stock/--out-of-stock", default=None, help="Stock flag.")
@click.pass_obj
def option_update(
    container,
    kind: str,
    option_id: str,
    name: str | None,
    price: str | None,
    available: bool | None,
    in_stock: bool | None,
) -> None:
    """Update an option's name, price or availability."""
    handler = UpdateOptionHandler(option_repo=container.options)
    try:
        updated = handler.handle(
            OptionKind(kind), option_id, additional_price=price,
            available=available, in_stock=in_stock, name=name,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{updated.kind.label} '{updated.name}' updated")
