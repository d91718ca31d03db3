"""Unit tests for the Cart aggregate."""

from datetime import timedelta

import pytest

from candleshop.domain.exceptions import EntityNotFoundError, ValidationError
from candleshop.domain.model.cart import Cart
from candleshop.domain.model.combination import Combination
from candleshop.domain.model.value_objects import Money
from tests.fakes import JAR, LAVENDER, SAGE, TIN


class TestCartCreation:

    def test_user_cart(self):
        cart = Cart.for_user("u1")
        assert cart.user_id == "u1"
        assert cart.guest_id is None
        assert cart.is_empty
        assert cart.total_price == Money.zero()

    def test_guest_cart_needs_id(self):
        with pytest.raises(ValidationError, match="guest id"):
            Cart.for_guest("")

    def test_retention_sets_expiry(self):
        cart = Cart.for_guest("g1", retention=timedelta(days=2))
        assert cart.expires_at - cart.created_at == timedelta(days=2)


class TestCartItems:

    def test_add_recomputes_total(self):
        cart = Cart.for_user("u1")
        cart.add_item(JAR, 1, Combination(), Money.of("15.99"))
        cart.add_item(TIN, 2, Combination(), Money.of("17.99"))
        assert cart.total_price == Money.of("51.97")
        assert cart.total_items == 3

    def test_same_line_grows_instead_of_duplicating(self):
        cart = Cart.for_user("u1")
        combo = Combination(scent_id=LAVENDER)
        cart.add_item(JAR, 1, combo, Money.of("17.99"))
        cart.add_item(JAR, 2, combo, Money.of("17.99"))
        assert len(cart.items) == 1
        assert cart.items[0].quantity.value == 3

    def test_different_combination_is_a_new_line(self):
        cart = Cart.for_user("u1")
        cart.add_item(JAR, 1, Combination(scent_id=LAVENDER), Money.of("17.99"))
        cart.add_item(JAR, 1, Combination(color_id=SAGE), Money.of("17.49"))
        assert len(cart.items) == 2

    def test_zero_quantity_rejected(self):
        cart = Cart.for_user("u1")
        with pytest.raises(ValidationError, match="at least 1"):
            cart.add_item(JAR, 0, Combination(), Money.of("15.99"))

    def test_update_and_remove(self):
        cart = Cart.for_user("u1")
        item = cart.add_item(JAR, 1, Combination(), Money.of("15.99"))
        cart.update_quantity(item.id, 4)
        assert cart.total_price == Money.of("63.96")
        cart.remove_item(item.id)
        assert cart.is_empty
        assert cart.total_price == Money.zero()

    def test_unknown_item(self):
        cart = Cart.for_user("u1")
        with pytest.raises(EntityNotFoundError, match="Cart item not found"):
            cart.remove_item("nope")

    def test_clear(self):
        cart = Cart.for_user("u1")
        cart.add_item(JAR, 2, Combination(), Money.of("15.99"))
        cart.clear()
        assert cart.is_empty
        assert cart.total_price == Money.zero()

    def test_recalculate_is_idempotent(self):
        cart = Cart.for_user("u1")
        cart.add_item(JAR, 2, Combination(), Money.of("15.99"))
        first = cart.recalculate()
        assert cart.recalculate() == first == Money.of("31.98")


class TestCartOwnershipAndExpiry:

    def test_user_cart_ignores_guest_token(self):
        cart = Cart.for_user("u1")
        assert cart.is_owned_by(user_id="u1")
        assert not cart.is_owned_by(guest_id="u1")

    def test_guest_cart(self):
        cart = Cart.for_guest("g1")
        assert cart.is_owned_by(guest_id="g1")
        assert not cart.is_owned_by(user_id="u1", guest_id="g2")

    def test_mutation_slides_expiry(self):
        cart = Cart.for_user("u1")
        cart.expires_at = cart.created_at  # pretend it is about to lapse
        cart.add_item(JAR, 1, Combination(), Money.of("15.99"))
        assert cart.expires_at == cart.updated_at + cart.retention

    def test_is_expired(self):
        cart = Cart.for_user("u1")
        assert not cart.is_expired()
        assert cart.is_expired(cart.expires_at + timedelta(seconds=1))
