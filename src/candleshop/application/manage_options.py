"""Application services: Add / Update customization option use cases."""

from __future__ import annotations

from candleshop.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from candleshop.domain.model.identifiers import new_id
from candleshop.domain.model.option import Option, OptionKind
from candleshop.domain.model.value_objects import Money
from candleshop.domain.repository.option_repository import OptionRepository


class AddOptionHandler:

    def __init__(self, option_repo: OptionRepository) -> None:
        self._option_repo = option_repo

    def handle(
        self,
        kind: OptionKind,
        name: str,
        additional_price: str = "0",
        description: str = "",
        attributes: dict[str, str] | None = None,
    ) -> Option:
        if not name or not name.strip():
            raise ValidationError.for_field("name", f"{kind.label} name is required")

        wanted = name.strip().lower()
        if any(o.name.lower() == wanted for o in self._option_repo.list_by_kind(kind)):
            raise ConflictError(f"{kind.label} '{name.strip()}' already exists")

        option = Option(
            id=new_id(),
            kind=kind,
            name=name.strip(),
            additional_price=Money.of(additional_price),
            description=description,
            attributes=dict(attributes or {}),
        )
        self._option_repo.save(option)
        return option


class UpdateOptionHandler:

    def __init__(self, option_repo: OptionRepository) -> None:
        self._option_repo = option_repo

    def handle(
        self,
        kind: OptionKind,
        option_id: str,
        additional_price: str | None = None,
        available: bool | None = None,
        in_stock: bool | None = None,
        name: str | None = None,
    ) -> Option:
        option = self._option_repo.get(kind, option_id)
        if option is None:
            raise EntityNotFoundError(f"{kind.label} '{option_id}' not found")

        if name is not None:
            option.rename(name)
        if additional_price is not None:
            option.update_price(Money.of(additional_price))
        option.set_availability(available=available, in_stock=in_stock)

        self._option_repo.save(option)
        return option
