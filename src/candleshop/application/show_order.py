"""Application services: order queries.

Customers see their own orders; administrators see everything.  The
public tracking lookup by order number needs no login.
"""

from __future__ import annotations

from candleshop.application.dto import Caller
from candleshop.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from candleshop.domain.model.order import Order, OrderStatus
from candleshop.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller, order_id: str) -> Order:
        caller.require_user()
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        if not caller.is_admin and not order.is_owned_by(caller.user_id):
            raise ForbiddenError("Not authorized to view this order")
        return order


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        caller: Caller,
        status: OrderStatus | None = None,
        all_customers: bool = False,
    ) -> list[Order]:
        user_id = caller.require_user()
        if all_customers:
            caller.require_admin()
            return self._order_repo.list_all(status)
        orders = self._order_repo.list_by_user(user_id)
        if status is not None:
            orders = [o for o in orders if o.status == status]
        return orders


class TrackOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_number: str) -> Order:
        if not order_number or not order_number.strip():
            raise ValidationError.for_field("orderNumber", "Order number is required")
        order = self._order_repo.get_by_order_number(order_number.strip().upper())
        if order is None:
            raise EntityNotFoundError("Order not found")
        return order
