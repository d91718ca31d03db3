"""Notifier that renders emails and writes them to the log.

Actual email delivery is outside this service; a mail relay can pick up
the ``email`` events on the ``mail`` channel or replace this adapter.
"""

from __future__ import annotations

from typing import Any

import structlog

from candleshop.application.ports import Notifier
from candleshop.domain.model.order import Order, OrderStatus

mail_log = structlog.get_logger(__name__)


class LoggingNotifier(Notifier):

    def __init__(self, sender: str, admin_email: str) -> None:
        self._sender = sender
        self._admin_email = admin_email

    def order_confirmation(self, order: Order) -> None:
        lines = [f"Thank you for your order {order.order_number}.", ""]
        for item in order.items:
            lines.append(
                f"  {item.quantity.value} x {item.product_snapshot.name} @ {item.unit_price}"
            )
        lines += [
            "",
            f"Subtotal: {order.totals.subtotal}",
            f"Tax:      {order.totals.tax}",
            f"Shipping: {order.totals.shipping}",
            f"Total:    {order.totals.total}",
        ]
        self._send(order.email, f"Order confirmation {order.order_number}", "\n".join(lines))

    def order_status_changed(
        self, order: Order, previous: OrderStatus, message: str | None = None
    ) -> None:
        body = f"Your order {order.order_number} is now {order.status.value}."
        if order.tracking_number:
            body += f"\nTracking number: {order.tracking_number}"
            if order.carrier:
                body += f" ({order.carrier})"
        if message:
            body += f"\n\n{message}"
        self._send(order.email, f"Order {order.order_number} update", body)

    def report_error(self, error: BaseException, context: dict[str, Any]) -> None:
        details = "\n".join(f"{key}: {value}" for key, value in sorted(context.items()))
        self._send(
            self._admin_email,
            f"Server error: {type(error).__name__}",
            f"{error}\n\n{details}",
        )

    def _send(self, to: str, subject: str, body: str) -> None:
        mail_log.info(
            "email", channel="mail", sender=self._sender, to=to, subject=subject, body=body
        )
