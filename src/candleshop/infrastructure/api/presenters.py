"""Render domain objects as JSON-ready dicts (camelCase, prices as numbers)."""

from __future__ import annotations

from typing import Any

from candleshop.domain.model.cart import Cart
from candleshop.domain.model.option import Option, OptionKind
from candleshop.domain.model.order import Order
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.cart_merge_service import SkippedItem


def option_json(option: Option) -> dict[str, Any]:
    return {
        "id": option.id,
        "kind": option.kind.value,
        "name": option.name,
        "description": option.description,
        "additionalPrice": float(option.additional_price),
        "available": option.available,
        "inStock": option.in_stock,
        **({"attributes": option.attributes} if option.attributes else {}),
    }


def options_json(grouped: dict[OptionKind, list[Option]]) -> dict[str, Any]:
    return {kind.plural: [option_json(o) for o in grouped.get(kind, [])] for kind in OptionKind}


def cart_json(cart: Cart, products: ProductRepository | None = None) -> dict[str, Any]:
    items = []
    for item in cart.items:
        product = products.get_by_id(item.product_id) if products is not None else None
        items.append({
            "id": item.id,
            "productId": item.product_id,
            "product": (
                {"id": product.id, "name": product.name, "basePrice": float(product.base_price)}
                if product is not None else None
            ),
            "quantity": item.quantity.value,
            "customizations": item.combination.to_dict(),
            "price": float(item.unit_price),
            "lineTotal": float(item.line_total),
        })
    return {
        "id": cart.id,
        "userId": cart.user_id,
        "guestId": cart.guest_id,
        "items": items,
        "totalItems": cart.total_items,
        "totalPrice": float(cart.total_price),
        "expiresAt": cart.expires_at.isoformat(),
    }


def skipped_json(skipped: list[SkippedItem]) -> list[dict[str, Any]]:
    return [
        {"productId": s.product_id, "quantity": s.quantity, "reason": s.reason}
        for s in skipped
    ]


def _address_json(address) -> dict[str, str]:
    raw = address.to_dict()
    return {
        "firstName": raw["first_name"],
        "lastName": raw["last_name"],
        "street": raw["street"],
        "city": raw["city"],
        "state": raw["state"],
        "zipCode": raw["zip_code"],
        "country": raw["country"],
    }


def order_summary_json(order: Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "orderNumber": order.order_number,
        "status": order.status.value,
        "totalItems": order.total_items,
        "totalPrice": float(order.totals.total),
        "createdAt": order.created_at.isoformat(),
    }


def order_json(order: Order) -> dict[str, Any]:
    return {
        **order_summary_json(order),
        "email": order.email,
        "userId": order.user_id,
        "trackingNumber": order.tracking_number,
        "carrier": order.carrier,
        "items": [
            {
                "productId": item.product_id,
                "productSnapshot": {
                    "id": item.product_snapshot.id,
                    "name": item.product_snapshot.name,
                    "description": item.product_snapshot.description,
                    "basePrice": float(item.product_snapshot.base_price),
                    "category": item.product_snapshot.category,
                },
                "quantity": item.quantity.value,
                "customizations": item.customizations,
                "price": float(item.unit_price),
                "lineTotal": float(item.line_total),
            }
            for item in order.items
        ],
        "shippingAddress": _address_json(order.shipping_address),
        "billingAddress": _address_json(order.billing_address),
        "paymentDetails": {
            "method": order.payment.method,
            "transactionId": order.payment.transaction_id,
            "status": order.payment.status.value,
        },
        "subtotal": float(order.totals.subtotal),
        "tax": float(order.totals.tax),
        "shippingCost": float(order.totals.shipping),
        "updatedAt": order.updated_at.isoformat(),
    }


def tracking_json(order: Order) -> dict[str, Any]:
    """Public view for order tracking: no addresses or payment details."""
    return {
        "orderNumber": order.order_number,
        "status": order.status.value,
        "trackingNumber": order.tracking_number,
        "carrier": order.carrier,
        "totalItems": order.total_items,
        "totalPrice": float(order.totals.total),
        "createdAt": order.created_at.isoformat(),
        "updatedAt": order.updated_at.isoformat(),
    }
