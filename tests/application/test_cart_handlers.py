"""Integration tests for the cart use cases.

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from candleshop.application.add_cart_item import AddCartItemHandler
from candleshop.application.clear_cart import ClearCartHandler
from candleshop.application.dto import Caller
from candleshop.application.get_cart import GetCartHandler
from candleshop.application.update_cart_item import RemoveCartItemHandler, UpdateCartItemHandler
from candleshop.domain.exceptions import EntityNotFoundError, ValidationError
from candleshop.domain.model.combination import Combination
from candleshop.domain.model.value_objects import Money
from tests.fakes import (
    CORAL,
    JAR,
    LARGE,
    LAVENDER,
    SAGE,
    SOLD_OUT,
    TIN,
    FakeCartRepository,
    oid,
    sample_catalog,
)

GUEST = Caller(guest_id="guest-1")
USER = Caller(user_id="user-1")


def _setup():
    options, products = sample_catalog()
    carts = FakeCartRepository()
    handler = AddCartItemHandler(carts, products, options)
    return handler, carts, products


class TestAddCartItem:

    def test_adds_customized_item_at_computed_price(self):
        handler, carts, _ = _setup()
        cart = handler.handle(GUEST, JAR, 1, Combination(LAVENDER, SAGE, LARGE))
        assert cart.guest_id == "guest-1"
        assert cart.items[0].unit_price == Money.of("22.49")
        assert carts.get_by_guest("guest-1") is cart

    def test_reuses_existing_cart(self):
        handler, _, _ = _setup()
        first = handler.handle(USER, JAR, 1, Combination())
        second = handler.handle(USER, TIN, 1, Combination())
        assert first.id == second.id
        assert second.total_price == Money.of("33.98")

    def test_uppercase_product_id_is_stored_lowercase(self):
        handler, _, _ = _setup()
        handler.handle(USER, JAR, 1, Combination(scent_id=LAVENDER))
        cart = handler.handle(USER, JAR.upper(), 2, Combination(scent_id=LAVENDER.upper()))
        assert len(cart.items) == 1
        assert cart.items[0].product_id == JAR
        assert cart.items[0].quantity.value == 3

    def test_product_id_required(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="Product ID is required"):
            handler.handle(GUEST, "", 1, Combination())

    def test_quantity_must_be_positive(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="at least 1") as info:
            handler.handle(GUEST, JAR, 0, Combination())
        assert info.value.errors == {"quantity": "Quantity must be at least 1"}

    def test_unknown_product(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle(GUEST, oid(0xBAD), 1, Combination())

    def test_out_of_stock(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="out of stock"):
            handler.handle(GUEST, SOLD_OUT, 1, Combination())

    def test_counts_quantity_already_in_cart(self):
        handler, _, _ = _setup()
        handler.handle(GUEST, TIN, 4, Combination())
        with pytest.raises(ValidationError, match="Only 5 items available"):
            handler.handle(GUEST, TIN, 2, Combination())

    def test_invalid_customization(self):
        handler, carts, _ = _setup()
        with pytest.raises(ValidationError, match="not available for this product") as info:
            handler.handle(GUEST, JAR, 1, Combination(color_id=CORAL))
        assert "customizations" in info.value.errors
        assert carts.get_by_guest("guest-1").is_empty

    def test_needs_an_identity(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="identity"):
            handler.handle(Caller(), JAR, 1, Combination())


class TestCartLineHandlers:

    def _cart_with_jar(self):
        handler, carts, products = _setup()
        cart = handler.handle(USER, JAR, 1, Combination())
        return carts, products, cart.items[0].id

    def test_update_quantity(self):
        carts, products, item_id = self._cart_with_jar()
        cart = UpdateCartItemHandler(carts, products).handle(USER, item_id, 3)
        assert cart.total_price == Money.of("47.97")

    def test_update_checks_inventory(self):
        carts, products, item_id = self._cart_with_jar()
        with pytest.raises(ValidationError, match="Only 10 items available"):
            UpdateCartItemHandler(carts, products).handle(USER, item_id, 11)

    def test_update_unknown_item(self):
        carts, products, _ = self._cart_with_jar()
        with pytest.raises(EntityNotFoundError, match="Cart item not found"):
            UpdateCartItemHandler(carts, products).handle(USER, "missing", 1)

    def test_remove(self):
        carts, _, item_id = self._cart_with_jar()
        cart = RemoveCartItemHandler(carts).handle(USER, item_id)
        assert cart.is_empty

    def test_clear(self):
        carts, _, _ = self._cart_with_jar()
        cart = ClearCartHandler(carts).handle(USER)
        assert cart.is_empty
        assert cart.total_price == Money.zero()

    def test_clear_without_cart(self):
        with pytest.raises(EntityNotFoundError, match="Cart not found"):
            ClearCartHandler(FakeCartRepository()).handle(USER)

    def test_get_creates_empty_cart(self):
        carts = FakeCartRepository()
        cart = GetCartHandler(carts).handle(USER)
        assert cart.user_id == "user-1"
        assert carts.get_by_user("user-1") is cart
