"""Application service: Purge Expired Carts use case."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from candleshop.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class PurgeExpiredCartsHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, now: datetime | None = None) -> int:
        removed = self._cart_repo.delete_expired(now or datetime.now(timezone.utc))
        logger.info("expired_carts_purged", removed=removed)
        return removed
