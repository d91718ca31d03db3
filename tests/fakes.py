"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
and the infrastructure adapters but keep everything in a dict. No file
I/O, no side effects.

``sample_catalog()`` builds the small candle catalog most tests use.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from candleshop.application.ports import Notifier, PaymentGateway, PaymentVerification
from candleshop.domain.model.cart import Cart
from candleshop.domain.model.option import Option, OptionKind
from candleshop.domain.model.order import Order, OrderStatus, PaymentStatus
from candleshop.domain.model.product import Product
from candleshop.domain.model.value_objects import Money
from candleshop.domain.repository.cart_repository import CartRepository
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.order_repository import OrderRepository
from candleshop.domain.repository.product_repository import ProductRepository


def oid(n: int) -> str:
    """A well-formed 24-hex-digit id."""
    return f"{n:024x}"


class FakeOptionRepository(OptionRepository):

    def __init__(self, options: list[Option] | None = None) -> None:
        self._store: dict[str, Option] = {}
        for o in options or []:
            self._store[o.id] = o

    def get(self, kind: OptionKind, option_id: str) -> Option | None:
        option = self._store.get(option_id)
        if option is None or option.kind != kind:
            return None
        return option

    def list_by_kind(self, kind: OptionKind) -> list[Option]:
        return [o for o in self._store.values() if o.kind == kind]

    def save(self, option: Option) -> None:
        self._store[option.id] = option


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeCartRepository(CartRepository):

    def __init__(self) -> None:
        self._store: dict[str, Cart] = {}

    def get_by_id(self, cart_id: str) -> Cart | None:
        return self._store.get(cart_id)

    def get_by_user(self, user_id: str) -> Cart | None:
        for c in self._store.values():
            if c.user_id == user_id:
                return c
        return None

    def get_by_guest(self, guest_id: str) -> Cart | None:
        for c in self._store.values():
            if c.user_id is None and c.guest_id == guest_id:
                return c
        return None

    def save(self, cart: Cart) -> None:
        cart.recalculate()
        self._store[cart.id] = cart

    def delete(self, cart_id: str) -> None:
        self._store.pop(cart_id, None)

    def delete_expired(self, now: datetime) -> int:
        doomed = [c.id for c in self._store.values() if c.is_expired(now)]
        for cart_id in doomed:
            del self._store[cart_id]
        return len(doomed)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[str, Order] = {}

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def get_by_order_number(self, order_number: str) -> Order | None:
        for o in self._store.values():
            if o.order_number == order_number:
                return o
        return None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self._store.values() if o.user_id == user_id]

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        return [o for o in self._store.values() if status is None or o.status == status]

    def save(self, order: Order) -> None:
        self._store[order.id] = order


class FakeNotifier(Notifier):
    """Records every call; raises on every call when ``fail`` is set."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, Any]] = []

    def order_confirmation(self, order: Order) -> None:
        self._record("order_confirmation", order.order_number)

    def order_status_changed(
        self, order: Order, previous: OrderStatus, message: str | None = None
    ) -> None:
        self._record("order_status_changed", (order.order_number, previous, order.status, message))

    def report_error(self, error: BaseException, context: dict[str, Any]) -> None:
        self._record("report_error", (error, context))

    def _record(self, kind: str, payload: Any) -> None:
        if self.fail:
            raise RuntimeError("mail relay down")
        self.sent.append((kind, payload))


class FakePaymentGateway(PaymentGateway):

    def __init__(self, status: PaymentStatus = PaymentStatus.COMPLETED) -> None:
        self.status = status
        self.calls: list[tuple[str, Money]] = []

    def verify(self, transaction_id: str, amount: Money) -> PaymentVerification:
        self.calls.append((transaction_id, amount))
        return PaymentVerification(self.status)


# ---------------------------------------------------------------------------
# Sample catalog
# ---------------------------------------------------------------------------

LAVENDER = oid(0x101)
VANILLA = oid(0x102)
SAGE = oid(0x201)
MIDNIGHT = oid(0x202)  # unavailable
CORAL = oid(0x203)  # not offered by the jar
LARGE = oid(0x301)
SMALL = oid(0x302)

JAR = oid(0xA01)  # 15.99, every option above except coral/midnight
TIN = oid(0xA02)  # 17.99, plain, no customization
SOLD_OUT = oid(0xA03)  # 12.00, inventory 0


def sample_options() -> list[Option]:
    return [
        Option(LAVENDER, OptionKind.SCENT, "Lavender", Money.of("2.00")),
        Option(VANILLA, OptionKind.SCENT, "Vanilla", Money.of("1.00")),
        Option(SAGE, OptionKind.COLOR, "Sage", Money.of("1.50")),
        Option(MIDNIGHT, OptionKind.COLOR, "Midnight", Money.of("1.50"), available=False),
        Option(CORAL, OptionKind.COLOR, "Coral", Money.of("0.50")),
        Option(LARGE, OptionKind.SIZE, "Large", Money.of("3.00")),
        Option(SMALL, OptionKind.SIZE, "Small"),
    ]


def sample_products() -> list[Product]:
    return [
        Product(
            id=JAR,
            name="Classic Jar",
            base_price=Money.of("15.99"),
            scent_ids=[LAVENDER, VANILLA],
            color_ids=[SAGE, MIDNIGHT],
            size_ids=[LARGE, SMALL],
            inventory=10,
        ),
        Product(id=TIN, name="Travel Tin", base_price=Money.of("17.99"), inventory=5),
        Product(id=SOLD_OUT, name="Pillar", base_price=Money.of("12.00"), inventory=0),
    ]


def sample_catalog() -> tuple[FakeOptionRepository, FakeProductRepository]:
    return FakeOptionRepository(sample_options()), FakeProductRepository(sample_products())
