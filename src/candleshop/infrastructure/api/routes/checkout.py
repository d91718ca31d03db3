"""Checkout endpoints: preview, shipping quote and order placement."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from candleshop.application.dto import Caller, CheckoutRequest
from candleshop.application.process_checkout import ProcessCheckoutHandler
from candleshop.application.validate_checkout import QuoteShippingHandler, ValidateCheckoutHandler
from candleshop.infrastructure.api.dependencies import get_caller, get_container
from candleshop.infrastructure.api.schemas import (
    CheckoutPayload,
    PaymentPayload,
    ShippingPayload,
    ValidateCheckoutPayload,
    address_dict,
)
from candleshop.infrastructure.bootstrap import Container

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.post("/validate")
def validate_checkout(
    payload: ValidateCheckoutPayload,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    preview = ValidateCheckoutHandler(container.carts, container.products).handle(
        caller,
        payload.cart_id or "",
        address_dict(payload.shipping_address),
        address_dict(payload.billing_address),
    )
    return {
        "success": True,
        "valid": preview.valid,
        "cart": {"id": preview.cart_id, "totalItems": preview.total_items},
        "pricing": {
            "subtotal": float(preview.totals.subtotal),
            "tax": float(preview.totals.tax),
            "shippingCost": float(preview.totals.shipping),
            "totalPrice": float(preview.totals.total),
        },
        "inventoryErrors": preview.inventory_errors,
        "addressErrors": preview.address_errors,
    }


@router.post("/shipping")
def calculate_shipping(
    payload: ShippingPayload,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    quote = QuoteShippingHandler(container.carts).handle(caller, payload.cart_id or "")
    return {
        "success": True,
        "shippingCost": float(quote.shipping),
        "freeShippingThreshold": float(quote.free_shipping_threshold),
        "amountToFreeShipping": float(quote.amount_to_free_shipping),
    }


@router.post("/process", status_code=201)
def process_checkout(
    payload: CheckoutPayload,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    payment = payload.payment_details or PaymentPayload()
    request = CheckoutRequest(
        cart_id=payload.cart_id or "",
        email=payload.email or "",
        shipping_address=address_dict(payload.shipping_address) or {},
        billing_address=address_dict(payload.billing_address) or {},
        payment_method=payment.method or "",
        transaction_id=payment.transaction_id or "",
    )
    handler = ProcessCheckoutHandler(
        container.carts,
        container.orders,
        container.products,
        container.options,
        container.notifier,
        transactions=container.store,
    )
    receipt = handler.handle(caller, request)
    return {
        "success": True,
        "message": "Order created successfully",
        "order": {
            "id": receipt.id,
            "orderNumber": receipt.order_number,
            "email": receipt.email,
            "totalPrice": float(receipt.total),
            "status": receipt.status,
        },
    }
