"""Unit tests for tax, shipping and order totals."""

from decimal import Decimal

import pytest

from candleshop.domain.model.value_objects import Money
from candleshop.domain.service.pricing_policy import (
    FLAT_SHIPPING,
    compute_order_totals,
    quote_shipping,
    shipping_for,
)


class TestShipping:

    def test_flat_fee_below_threshold(self):
        assert shipping_for(Money.of("49.99")) == Money.of("5.99")

    def test_exactly_threshold_still_pays(self):
        assert shipping_for(Money.of("50.00")) == FLAT_SHIPPING

    def test_free_above_threshold(self):
        assert shipping_for(Money.of("50.01")).is_zero


class TestOrderTotals:

    def test_two_item_checkout(self):
        subtotal = Money.of("15.99") + Money.of("17.99") * 2
        totals = compute_order_totals(subtotal)
        assert totals.subtotal == Money.of("51.97")
        assert totals.tax == Money.of("4.16")
        assert totals.shipping.is_zero
        assert totals.total == Money.of("56.13")

    @pytest.mark.parametrize("raw", ["0.00", "9.99", "22.49", "50.00", "50.01", "123.45"])
    def test_total_formula(self, raw):
        subtotal = Money.of(raw)
        totals = compute_order_totals(subtotal)
        tax = (subtotal.amount * Decimal("0.08")).quantize(Decimal("0.01"), rounding="ROUND_HALF_UP")
        shipping = Decimal("0") if subtotal.amount > Decimal("50") else Decimal("5.99")
        assert totals.total.amount == (subtotal.amount + tax + shipping).quantize(Decimal("0.01"))


class TestShippingQuote:

    def test_amount_to_free_shipping(self):
        quote = quote_shipping(Money.of("31.98"))
        assert quote.shipping == Money.of("5.99")
        assert quote.free_shipping_threshold == Money.of("50.00")
        assert quote.amount_to_free_shipping == Money.of("18.02")

    def test_nothing_left_above_threshold(self):
        quote = quote_shipping(Money.of("75.00"))
        assert quote.shipping.is_zero
        assert quote.amount_to_free_shipping.is_zero
