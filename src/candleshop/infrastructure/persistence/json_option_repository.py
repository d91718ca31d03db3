"""JSON-store implementation of OptionRepository.

All three kinds share the ``options`` collection, told apart by ``kind``.
"""

from __future__ import annotations

from decimal import Decimal

from candleshop.domain.model.identifiers import normalize_id
from candleshop.domain.model.option import Option, OptionKind
from candleshop.domain.model.value_objects import Money
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.infrastructure.persistence.json_store import JsonDocumentStore


class JsonOptionRepository(OptionRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._collection = store.collection("options")

    # --- OptionRepository interface -------------------------------------------

    def get(self, kind: OptionKind, option_id: str) -> Option | None:
        raw = self._collection.get(normalize_id(option_id))
        if raw is None or raw["kind"] != kind.value:
            return None
        return self._to_domain(raw)

    def list_by_kind(self, kind: OptionKind) -> list[Option]:
        docs = self._collection.find(lambda raw: raw["kind"] == kind.value)
        return sorted((self._to_domain(raw) for raw in docs), key=lambda o: o.name.lower())

    def save(self, option: Option) -> None:
        self._collection.upsert(self._to_raw(option))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(option: Option) -> dict:
        return {
            "id": option.id,
            "kind": option.kind.value,
            "name": option.name,
            "description": option.description,
            "additional_price": str(option.additional_price.amount),
            "currency": option.additional_price.currency,
            "available": option.available,
            "in_stock": option.in_stock,
            "attributes": dict(option.attributes),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Option:
        return Option(
            id=raw["id"],
            kind=OptionKind(raw["kind"]),
            name=raw["name"],
            description=raw.get("description", ""),
            additional_price=Money(Decimal(raw["additional_price"]), raw.get("currency", "USD")),
            available=raw.get("available", True),
            in_stock=raw.get("in_stock", True),
            attributes=raw.get("attributes", {}),
        )
