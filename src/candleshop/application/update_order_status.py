"""Application service: Update Order Status use case.

Administrators move orders forward through the fixed stages.  The
customer is notified when the status actually changes, unless the
caller opts out.
"""

from __future__ import annotations

import structlog

from candleshop.application.dto import Caller
from candleshop.application.ports import Notifier, notify_safely
from candleshop.domain.exceptions import EntityNotFoundError, ValidationError
from candleshop.domain.model.order import Order, OrderStatus
from candleshop.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


def parse_status(raw: str | None) -> OrderStatus:
    try:
        return OrderStatus((raw or "").strip().lower())
    except ValueError:
        raise ValidationError.for_field("status", "Invalid status value") from None


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, notifier: Notifier) -> None:
        self._order_repo = order_repo
        self._notifier = notifier

    def handle(
        self,
        caller: Caller,
        order_id: str,
        status: OrderStatus,
        tracking_number: str | None = None,
        send_notification: bool = True,
        message: str | None = None,
    ) -> Order:
        caller.require_admin()

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        previous = order.status
        order.advance_to(status, tracking_number=tracking_number)
        self._order_repo.save(order)
        logger.info(
            "order_status_changed",
            order_number=order.order_number,
            previous=previous.value,
            status=status.value,
        )

        if send_notification:
            notify_safely(self._notifier.order_status_changed, order, previous, message)
        return order

    def set_tracking(
        self,
        caller: Caller,
        order_id: str,
        tracking_number: str,
        carrier: str | None = None,
        send_notification: bool = True,
    ) -> Order:
        """Record tracking; an order that was not shipped yet ships now."""
        caller.require_admin()
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        previous = order.status
        order.update_tracking(tracking_number, carrier)
        self._order_repo.save(order)

        if order.status != previous:
            logger.info(
                "order_status_changed",
                order_number=order.order_number,
                previous=previous.value,
                status=order.status.value,
            )
            if send_notification:
                notify_safely(self._notifier.order_status_changed, order, previous, None)
        return order
