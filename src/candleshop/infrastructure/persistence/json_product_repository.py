"""JSON-store implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from candleshop.domain.model.identifiers import normalize_id
from candleshop.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD, Product
from candleshop.domain.model.value_objects import Money
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.infrastructure.persistence.json_store import JsonDocumentStore


class JsonProductRepository(ProductRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._collection = store.collection("products")

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._collection.get(normalize_id(product_id))
        return self._to_domain(raw) if raw is not None else None

    def get_by_name(self, name: str) -> Product | None:
        wanted = name.lower()
        raw = self._collection.find_one(lambda doc: doc["name"].lower() == wanted)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return sorted(
            (self._to_domain(raw) for raw in self._collection.find()),
            key=lambda p: p.name.lower(),
        )

    def save(self, product: Product) -> None:
        self._collection.upsert(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "base_price": str(product.base_price.amount),
            "currency": product.base_price.currency,
            "customization_options": {
                "scents": list(product.scent_ids),
                "colors": list(product.color_ids),
                "sizes": list(product.size_ids),
            },
            "inventory": product.inventory,
            "low_stock_threshold": product.low_stock_threshold,
            "category": product.category,
            "featured": product.featured,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        options = raw.get("customization_options", {})
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            base_price=Money(Decimal(raw["base_price"]), raw.get("currency", "USD")),
            scent_ids=list(options.get("scents", [])),
            color_ids=list(options.get("colors", [])),
            size_ids=list(options.get("sizes", [])),
            inventory=raw.get("inventory", 0),
            low_stock_threshold=raw.get("low_stock_threshold", DEFAULT_LOW_STOCK_THRESHOLD),
            category=raw.get("category", "candles"),
            featured=raw.get("featured", False),
        )
