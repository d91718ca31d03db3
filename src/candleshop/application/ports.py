"""Ports — interfaces the application needs from the outside world.

Concrete adapters live in ``candleshop.infrastructure``; tests use
in-memory fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from typing import Any

import structlog

from candleshop.domain.model.order import Order, OrderStatus, PaymentStatus
from candleshop.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


class Notifier(ABC):
    """Outbound customer and operator notifications (email)."""

    @abstractmethod
    def order_confirmation(self, order: Order) -> None:
        """Tell the customer their order was placed."""

    @abstractmethod
    def order_status_changed(
        self, order: Order, previous: OrderStatus, message: str | None = None
    ) -> None:
        """Tell the customer their order moved to a new status."""

    @abstractmethod
    def report_error(self, error: BaseException, context: dict[str, Any]) -> None:
        """Alert operators about an unexpected server error."""


def notify_safely(action: Callable[..., None], *args: Any, **kwargs: Any) -> bool:
    """Run a notifier call without letting its failure reach the caller.

    Notifications are fire-and-forget: a failed email is logged and the
    request that triggered it still succeeds.
    """
    try:
        action(*args, **kwargs)
    except Exception:
        logger.exception("notification_failed", action=getattr(action, "__name__", repr(action)))
        return False
    return True


@dataclass(frozen=True)
class PaymentVerification:
    status: PaymentStatus
    detail: str = ""


class PaymentGateway(ABC):

    @abstractmethod
    def verify(self, transaction_id: str, amount: Money) -> PaymentVerification:
        """Ask the payment processor whether the payment intent succeeded."""


class TransactionManager(ABC):

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """All writes inside commit together or not at all."""


class NoTransaction(TransactionManager):
    """Runs the block as-is; for stores without transactions."""

    @contextmanager
    def transaction(self) -> Iterator[None]:
        yield
