"""Application service: Show Dashboard use case.

Counts, revenue for the current day and month, the latest orders and
the products running low.  Day and month boundaries are UTC, the zone
order timestamps are stored in.  Cancelled orders earn no revenue.
"""

from __future__ import annotations

from datetime import datetime, timezone

from candleshop.application.dto import DashboardDTO
from candleshop.domain.model.order import OrderStatus
from candleshop.domain.model.value_objects import Money
from candleshop.domain.repository.order_repository import OrderRepository
from candleshop.domain.repository.product_repository import ProductRepository

RECENT_ORDER_LIMIT = 5
LOW_STOCK_LIMIT = 5


class ShowDashboardHandler:

    def __init__(self, product_repo: ProductRepository, order_repo: OrderRepository) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(self, now: datetime | None = None) -> DashboardDTO:
        now = now or datetime.now(timezone.utc)
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_month = start_of_day.replace(day=1)

        products = self._product_repo.list_all()
        orders = sorted(self._order_repo.list_all(), key=lambda o: o.created_at, reverse=True)
        earning = [o for o in orders if o.status != OrderStatus.CANCELLED]

        low_stock = sorted(
            (p for p in products if p.is_low_stock), key=lambda p: (p.inventory, p.name)
        )
        return DashboardDTO(
            product_count=len(products),
            order_count=len(orders),
            today_revenue=sum(
                (o.totals.total for o in earning if o.created_at >= start_of_day),
                Money.zero(),
            ),
            monthly_revenue=sum(
                (o.totals.total for o in earning if o.created_at >= start_of_month),
                Money.zero(),
            ),
            recent_orders=orders[:RECENT_ORDER_LIMIT],
            low_stock_products=low_stock[:LOW_STOCK_LIMIT],
        )
