"""JSON-store implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from candleshop.domain.model.address import Address
from candleshop.domain.model.identifiers import normalize_id
from candleshop.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    OrderTotals,
    PaymentDetails,
    PaymentStatus,
)
from candleshop.domain.model.product import ProductSnapshot
from candleshop.domain.model.value_objects import Money, Quantity
from candleshop.domain.repository.order_repository import OrderRepository
from candleshop.infrastructure.persistence.json_store import JsonDocumentStore


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


class JsonOrderRepository(OrderRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._collection = store.collection("orders")

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._collection.get(normalize_id(order_id))
        return self._to_domain(raw) if raw is not None else None

    def get_by_order_number(self, order_number: str) -> Order | None:
        raw = self._collection.find_one(lambda doc: doc["order_number"] == order_number)
        return self._to_domain(raw) if raw is not None else None

    def list_by_user(self, user_id: str) -> list[Order]:
        docs = self._collection.find(lambda doc: doc.get("user_id") == user_id)
        return _newest_first([self._to_domain(raw) for raw in docs])

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        docs = self._collection.find(
            None if status is None else (lambda doc: doc["status"] == status.value)
        )
        return _newest_first([self._to_domain(raw) for raw in docs])

    def save(self, order: Order) -> None:
        self._collection.upsert(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "user_id": order.user_id,
            "email": order.email,
            "status": order.status.value,
            "tracking_number": order.tracking_number,
            "carrier": order.carrier,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_snapshot": item.product_snapshot.to_dict(),
                    "quantity": item.quantity.value,
                    "customizations": item.customizations,
                    "price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
            "shipping_address": order.shipping_address.to_dict(),
            "billing_address": order.billing_address.to_dict(),
            "payment_details": {
                "method": order.payment.method,
                "transaction_id": order.payment.transaction_id,
                "status": order.payment.status.value,
            },
            "subtotal": str(order.totals.subtotal.amount),
            "tax": str(order.totals.tax.amount),
            "shipping_cost": str(order.totals.shipping.amount),
            "total_price": str(order.totals.total.amount),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_snapshot=ProductSnapshot.from_dict(i["product_snapshot"]),
                quantity=Quantity(i["quantity"]),
                customizations=i.get("customizations", {}),
                unit_price=Money(Decimal(i["price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        payment = raw["payment_details"]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            user_id=raw.get("user_id"),
            email=raw["email"],
            items=items,
            shipping_address=Address.from_dict(raw["shipping_address"]),
            billing_address=Address.from_dict(raw["billing_address"]),
            payment=PaymentDetails(
                method=payment["method"],
                transaction_id=payment["transaction_id"],
                status=PaymentStatus(payment["status"]),
            ),
            totals=OrderTotals(
                subtotal=Money(Decimal(raw["subtotal"])),
                tax=Money(Decimal(raw["tax"])),
                shipping=Money(Decimal(raw["shipping_cost"])),
                total=Money(Decimal(raw["total_price"])),
            ),
            status=OrderStatus(raw["status"]),
            tracking_number=raw.get("tracking_number"),
            carrier=raw.get("carrier"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
