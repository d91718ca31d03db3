"""Composition root: builds the repositories and adapters behind one store.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Nothing here runs at
import time: callers build a ``Container`` from an explicit ``Settings``
and an open store, usually through ``open_container()``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from candleshop.application.ports import Notifier, PaymentGateway
from candleshop.infrastructure.adapters.logging_notifier import LoggingNotifier
from candleshop.infrastructure.adapters.payment_gateway import ManualPaymentGateway
from candleshop.infrastructure.config import Settings
from candleshop.infrastructure.persistence.json_cart_repository import JsonCartRepository
from candleshop.infrastructure.persistence.json_option_repository import (
    JsonOptionRepository,
)
from candleshop.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from candleshop.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from candleshop.infrastructure.persistence.json_store import JsonDocumentStore


@dataclass
class Container:
    settings: Settings
    store: JsonDocumentStore
    options: JsonOptionRepository
    products: JsonProductRepository
    carts: JsonCartRepository
    orders: JsonOrderRepository
    notifier: Notifier
    payments: PaymentGateway

    @staticmethod
    def build(
        settings: Settings,
        store: JsonDocumentStore,
        notifier: Notifier | None = None,
        payments: PaymentGateway | None = None,
    ) -> Container:
        return Container(
            settings=settings,
            store=store,
            options=JsonOptionRepository(store),
            products=JsonProductRepository(store),
            carts=JsonCartRepository(store, settings.cart_retention),
            orders=JsonOrderRepository(store),
            notifier=notifier or LoggingNotifier(settings.notification_sender, settings.admin_email),
            payments=payments or ManualPaymentGateway(),
        )


@contextmanager
def open_container(settings: Settings) -> Iterator[Container]:
    with JsonDocumentStore(settings.data_dir) as store:
        yield Container.build(settings, store)
