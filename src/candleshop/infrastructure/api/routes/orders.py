"""Order endpoints: history, detail, public tracking, status and payment."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from candleshop.application.confirm_payment import ConfirmPaymentHandler
from candleshop.application.dto import Caller
from candleshop.application.show_order import ListOrdersHandler, ShowOrderHandler, TrackOrderHandler
from candleshop.application.update_order_status import UpdateOrderStatusHandler, parse_status
from candleshop.infrastructure.api.dependencies import get_caller, get_container
from candleshop.infrastructure.api.presenters import order_json, order_summary_json, tracking_json
from candleshop.infrastructure.api.schemas import OrderStatusPayload, TrackingPayload
from candleshop.infrastructure.bootstrap import Container

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("")
def list_orders(
    status: str | None = None,
    all_customers: bool = Query(default=False, alias="all"),
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    wanted = parse_status(status) if status else None
    orders = ListOrdersHandler(container.orders).handle(caller, status=wanted, all_customers=all_customers)
    return {"success": True, "count": len(orders), "data": [order_summary_json(o) for o in orders]}


@router.get("/track/{order_number}")
def track_order(order_number: str, container: Container = Depends(get_container)):
    order = TrackOrderHandler(container.orders).handle(order_number)
    return {"success": True, "data": tracking_json(order)}


@router.get("/{order_id}")
def get_order(
    order_id: str,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    order = ShowOrderHandler(container.orders).handle(caller, order_id)
    return {"success": True, "data": order_json(order)}


@router.put("/{order_id}/status")
def update_status(
    order_id: str,
    payload: OrderStatusPayload,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    handler = UpdateOrderStatusHandler(container.orders, container.notifier)
    order = handler.handle(
        caller,
        order_id,
        parse_status(payload.status),
        tracking_number=payload.tracking_number,
        send_notification=payload.send_notification,
        message=payload.notification_message,
    )
    return {"success": True, "message": "Order status updated successfully", "data": order_json(order)}


@router.post("/{order_id}/payment/confirm")
def confirm_payment(
    order_id: str,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    order = ConfirmPaymentHandler(container.orders, container.payments).handle(caller, order_id)
    return {
        "success": True,
        "data": {"orderNumber": order.order_number, "paymentStatus": order.payment.status.value},
    }


@router.put("/{order_id}/tracking")
def update_tracking(
    order_id: str,
    payload: TrackingPayload,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    handler = UpdateOrderStatusHandler(container.orders, container.notifier)
    order = handler.set_tracking(
        caller,
        order_id,
        payload.tracking_number or "",
        carrier=payload.carrier,
        send_notification=payload.send_notification,
    )
    return {
        "success": True,
        "message": "Order tracking information updated successfully",
        "data": order_json(order),
    }
