"""Application service: Confirm Payment use case.

Before an order's payment is marked completed, the payment intent is
verified with the payment processor.  A failed verification is recorded
on the order; an inconclusive one leaves it pending.
"""

from __future__ import annotations

import structlog

from candleshop.application.dto import Caller
from candleshop.application.ports import PaymentGateway
from candleshop.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from candleshop.domain.model.order import Order, PaymentStatus
from candleshop.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class ConfirmPaymentHandler:

    def __init__(self, order_repo: OrderRepository, gateway: PaymentGateway) -> None:
        self._order_repo = order_repo
        self._gateway = gateway

    def handle(self, caller: Caller, order_id: str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        if not caller.is_admin and not order.is_owned_by(caller.user_id):
            raise ForbiddenError("Not authorized to confirm payment for this order")
        if order.payment.status == PaymentStatus.COMPLETED:
            raise ValidationError("Payment is already completed")

        verification = self._gateway.verify(order.payment.transaction_id, order.totals.total)
        logger.info(
            "payment_verified",
            order_number=order.order_number,
            transaction_id=order.payment.transaction_id,
            status=verification.status.value,
        )
        if verification.status == PaymentStatus.PENDING:
            return order

        order.mark_payment(verification.status)
        self._order_repo.save(order)
        return order
