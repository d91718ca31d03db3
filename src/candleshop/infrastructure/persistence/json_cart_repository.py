"""JSON-store implementation of CartRepository.

Expired carts behave as if already deleted: lookups skip them and
``delete_expired`` removes them for good.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from candleshop.domain.model.cart import DEFAULT_RETENTION, Cart, CartLineItem
from candleshop.domain.model.combination import Combination
from candleshop.domain.model.identifiers import normalize_id
from candleshop.domain.model.value_objects import Money, Quantity
from candleshop.domain.repository.cart_repository import CartRepository
from candleshop.infrastructure.persistence.json_store import JsonDocumentStore


def _is_live(raw: dict) -> bool:
    return datetime.fromisoformat(raw["expires_at"]) > datetime.now(timezone.utc)


class JsonCartRepository(CartRepository):

    def __init__(
        self,
        store: JsonDocumentStore,
        retention: timedelta = DEFAULT_RETENTION,
    ) -> None:
        self._collection = store.collection("carts")
        self._retention = retention

    # --- CartRepository interface ---------------------------------------------

    def get_by_id(self, cart_id: str) -> Cart | None:
        raw = self._collection.get(normalize_id(cart_id))
        if raw is None or not _is_live(raw):
            return None
        return self._to_domain(raw)

    def get_by_user(self, user_id: str) -> Cart | None:
        raw = self._collection.find_one(
            lambda doc: doc.get("user_id") == user_id and _is_live(doc)
        )
        return self._to_domain(raw) if raw is not None else None

    def get_by_guest(self, guest_id: str) -> Cart | None:
        raw = self._collection.find_one(
            lambda doc: doc.get("user_id") is None
            and doc.get("guest_id") == guest_id
            and _is_live(doc)
        )
        return self._to_domain(raw) if raw is not None else None

    def save(self, cart: Cart) -> None:
        cart.recalculate()
        self._collection.upsert(self._to_raw(cart))

    def delete(self, cart_id: str) -> None:
        self._collection.delete(cart_id)

    def delete_expired(self, now: datetime) -> int:
        return self._collection.delete_many(
            lambda doc: datetime.fromisoformat(doc["expires_at"]) <= now
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "guest_id": cart.guest_id,
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "customizations": {
                        "scent": item.combination.scent_id,
                        "color": item.combination.color_id,
                        "size": item.combination.size_id,
                    },
                    "price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in cart.items
            ],
            "total_price": str(cart.total_price.amount),
            "created_at": cart.created_at.isoformat(),
            "updated_at": cart.updated_at.isoformat(),
            "expires_at": cart.expires_at.isoformat(),
        }

    def _to_domain(self, raw: dict) -> Cart:
        items = [
            CartLineItem(
                id=i["id"],
                product_id=i["product_id"],
                quantity=Quantity(i["quantity"]),
                combination=Combination(
                    scent_id=i["customizations"].get("scent"),
                    color_id=i["customizations"].get("color"),
                    size_id=i["customizations"].get("size"),
                ),
                unit_price=Money(Decimal(i["price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        return Cart(
            id=raw["id"],
            user_id=raw.get("user_id"),
            guest_id=raw.get("guest_id"),
            items=items,
            total_price=Money(Decimal(raw["total_price"])),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            expires_at=datetime.fromisoformat(raw["expires_at"]),
            retention=self._retention,
        )
