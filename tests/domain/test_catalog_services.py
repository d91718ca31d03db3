"""Unit tests for the inventory check and catalog audit services."""

from candleshop.domain.model.cart import Cart
from candleshop.domain.model.combination import Combination
from candleshop.domain.model.product import Product
from candleshop.domain.model.value_objects import Money
from candleshop.domain.service.catalog_audit import audit_product
from candleshop.domain.service.inventory_check import check_inventory
from tests.fakes import JAR, LAVENDER, MIDNIGHT, SOLD_OUT, TIN, oid, sample_catalog


class TestInventoryCheck:

    def test_enough_stock(self):
        _, products = sample_catalog()
        cart = Cart.for_user("u1")
        cart.add_item(JAR, 2, Combination(), Money.of("15.99"))
        assert check_inventory(products, cart.items) == []

    def test_lines_for_one_product_share_stock(self):
        _, products = sample_catalog()
        cart = Cart.for_user("u1")
        cart.add_item(TIN, 3, Combination(), Money.of("17.99"))
        cart.add_item(TIN, 3, Combination(scent_id=LAVENDER), Money.of("19.99"))
        problems = check_inventory(products, cart.items)
        assert len(problems) == 1
        assert problems[0].requested == 6
        assert problems[0].message == "Only 5 of Travel Tin available"

    def test_out_of_stock_and_missing(self):
        _, products = sample_catalog()
        cart = Cart.for_user("u1")
        cart.add_item(SOLD_OUT, 1, Combination(), Money.of("12.00"))
        cart.add_item(oid(0xDEAD), 1, Combination(), Money.of("1.00"))
        messages = {p.product_id: p.message for p in check_inventory(products, cart.items)}
        assert messages == {SOLD_OUT: "Pillar is out of stock", oid(0xDEAD): "Product not found"}


class TestCatalogAudit:

    def test_healthy_product(self):
        options, products = sample_catalog()
        assert audit_product(products.get_by_id(JAR), options) == []

    def test_reports_every_problem(self):
        options, _ = sample_catalog()
        product = Product(
            id=oid(0xB01),
            name="Broken",
            base_price=Money.zero(),
            color_ids=[MIDNIGHT, oid(0xEEE)],
        )
        problems = audit_product(product, options)
        assert "Base price must be greater than zero" in problems
        assert f"References unknown color {oid(0xEEE)}" in problems
        assert "Product must have at least one available color option" in problems
        assert "Product is out of stock" in problems
