"""Application service: Process Checkout use case.

The only multi-write sequence in the system.  Inside one transaction:

1. Read the cart and check the caller may use it.
2. Check inventory for every line.
3. Write the order, with product and option snapshots.
4. Empty the cart.

Any failure aborts the whole sequence; nothing is retried.  The
confirmation email goes out only after the transaction committed, and
its failure never affects the result.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from candleshop.application.dto import Caller, CheckoutRequest, OrderReceiptDTO
from candleshop.application.ports import (
    NoTransaction,
    Notifier,
    TransactionManager,
    notify_safely,
)
from candleshop.application.validate_checkout import load_checkout_cart
from candleshop.domain.exceptions import ConflictError, ValidationError
from candleshop.domain.model.address import Address, order_address_errors
from candleshop.domain.model.cart import Cart
from candleshop.domain.model.identifiers import new_id
from candleshop.domain.model.option import OptionKind
from candleshop.domain.model.order import (
    Order,
    OrderLineItem,
    PaymentDetails,
    generate_order_number,
)
from candleshop.domain.repository.cart_repository import CartRepository
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.order_repository import OrderRepository
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.inventory_check import check_inventory
from candleshop.domain.service.pricing_policy import compute_order_totals

logger = structlog.get_logger(__name__)

MAX_ORDER_NUMBER_ATTEMPTS = 5


class ProcessCheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        option_repo: OptionRepository,
        notifier: Notifier,
        transactions: TransactionManager | None = None,
        order_numbers: Callable[[], str] = generate_order_number,
    ) -> None:
        self._cart_repo = cart_repo
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._option_repo = option_repo
        self._notifier = notifier
        self._transactions = transactions or NoTransaction()
        self._order_numbers = order_numbers

    def handle(self, caller: Caller, request: CheckoutRequest) -> OrderReceiptDTO:
        self._check_request(request)
        shipping = Address.from_dict(request.shipping_address)
        billing = Address.from_dict(request.billing_address)
        payment = PaymentDetails(method=request.payment_method, transaction_id=request.transaction_id)

        try:
            with self._transactions.transaction():
                cart = load_checkout_cart(self._cart_repo, request.cart_id, caller)
                if cart.is_empty:
                    raise ValidationError("Cannot checkout with empty cart")

                problems = check_inventory(self._product_repo, cart.items)
                if problems:
                    raise ValidationError(
                        "Some items are out of stock",
                        {p.product_id: p.message for p in problems},
                    )

                order = Order.place(
                    id=new_id(),
                    order_number=self._unique_order_number(),
                    email=request.email,
                    items=self._order_lines(cart),
                    shipping_address=shipping,
                    billing_address=billing,
                    payment=payment,
                    totals=compute_order_totals(cart.total_price),
                    user_id=caller.user_id,
                )
                self._order_repo.save(order)

                cart.clear()
                self._cart_repo.save(cart)
        except Exception:
            logger.warning("checkout_aborted", cart_id=request.cart_id)
            raise

        logger.info(
            "order_placed",
            order_number=order.order_number,
            cart_id=request.cart_id,
            total=str(order.totals.total),
        )
        notify_safely(self._notifier.order_confirmation, order)

        return OrderReceiptDTO(
            id=order.id,
            order_number=order.order_number,
            email=order.email,
            total=str(order.totals.total.amount),
            status=order.status.value,
        )

    # --- Helpers --------------------------------------------------------------

    @staticmethod
    def _check_request(request: CheckoutRequest) -> None:
        missing = {
            name: f"{name} is required"
            for name, value in (
                ("cartId", request.cart_id),
                ("email", request.email),
                ("paymentDetails", request.payment_method and request.transaction_id),
            )
            if not value
        }
        if missing:
            raise ValidationError("Missing required checkout fields", missing)

        address_errors = order_address_errors(request.shipping_address, request.billing_address)
        if address_errors:
            raise ValidationError("Invalid address information", address_errors)

    def _order_lines(self, cart: Cart) -> list[OrderLineItem]:
        lines: list[OrderLineItem] = []
        for item in cart.items:
            # check_inventory has already confirmed every product exists.
            product = self._product_repo.get_by_id(item.product_id)
            customizations: dict[str, dict | None] = {}
            for kind in OptionKind:
                option_id = item.combination.get(kind)
                option = self._option_repo.get(kind, option_id) if option_id else None
                customizations[kind.value] = option.snapshot() if option else None
            lines.append(
                OrderLineItem(
                    product_id=item.product_id,
                    product_snapshot=product.snapshot(),  # type: ignore[union-attr]
                    quantity=item.quantity,
                    customizations=customizations,
                    unit_price=item.unit_price,
                )
            )
        return lines

    def _unique_order_number(self) -> str:
        for _ in range(MAX_ORDER_NUMBER_ATTEMPTS):
            number = self._order_numbers()
            if self._order_repo.get_by_order_number(number) is None:
                return number
        raise ConflictError("Could not allocate a unique order number")
