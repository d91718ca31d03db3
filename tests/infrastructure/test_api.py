"""End-to-end tests for the HTTP API using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from candleshop.infrastructure.api.app import create_app
from candleshop.infrastructure.config import Settings
from candleshop.infrastructure.persistence.json_option_repository import JsonOptionRepository
from candleshop.infrastructure.persistence.json_product_repository import JsonProductRepository
from candleshop.infrastructure.persistence.json_store import JsonDocumentStore
from tests.fakes import CORAL, JAR, LARGE, LAVENDER, SAGE, TIN, oid, sample_options, sample_products

ADDRESS = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "street": "1 Wick Lane",
    "city": "Portland",
    "state": "OR",
    "zipCode": "97201",
    "country": "US",
}
USER = {"X-User-Id": "user-1"}
ADMIN = {"X-User-Id": "boss", "X-User-Role": "admin"}


def _settings(tmp_path, **overrides) -> Settings:
    with JsonDocumentStore(tmp_path) as store:
        options = JsonOptionRepository(store)
        products = JsonProductRepository(store)
        for o in sample_options():
            options.save(o)
        for p in sample_products():
            products.save(p)
    return Settings(data_dir=tmp_path, **overrides)


@pytest.fixture
def client(tmp_path):
    with TestClient(create_app(_settings(tmp_path))) as c:
        yield c


class TestCustomizationEndpoints:

    def test_valid_customization(self, client):
        r = client.post(
            f"/api/products/{JAR}/validate-customization",
            json={"scentId": LAVENDER, "colorId": SAGE, "sizeId": LARGE},
        )
        assert r.status_code == 200
        assert r.json() == {
            "success": True,
            "isValid": True,
            "message": "Customization is valid",
            "price": 22.49,
        }

    def test_invalid_color(self, client):
        r = client.post(f"/api/products/{JAR}/validate-customization", json={"colorId": CORAL})
        body = r.json()
        assert r.status_code == 200
        assert body["isValid"] is False
        assert "color" in body["message"]
        assert "not available for this product" in body["message"]
        assert body["price"] == 15.99

    def test_unknown_product(self, client):
        r = client.post(f"/api/products/{oid(0xBAD)}/validate-customization", json={})
        assert r.status_code == 404
        assert r.json() == {"success": False, "message": "Product not found"}

    def test_uppercase_ids_accepted(self, client):
        r = client.post(
            f"/api/products/{JAR.upper()}/validate-customization",
            json={"scentId": LAVENDER.upper(), "colorId": SAGE.upper()},
        )
        assert r.json()["isValid"] is True

    def test_malformed_product_id(self, client):
        r = client.get("/api/products/not-an-id/customization-options")
        assert r.status_code == 400
        assert r.json()["errors"] == {"productId": "Invalid product ID format"}

    def test_customization_options(self, client):
        data = client.get(f"/api/products/{JAR}/customization-options").json()["data"]
        assert [o["name"] for o in data["colors"]] == ["Sage"]
        assert [o["name"] for o in data["scents"]] == ["Lavender", "Vanilla"]
        assert data["sizes"][0]["additionalPrice"] == 3.0


class TestCartEndpoints:

    def test_guest_gets_cookie_and_keeps_cart(self, client):
        r = client.post(
            "/api/cart/items",
            json={"productId": JAR, "quantity": 1,
                  "customizations": {"scentId": LAVENDER, "colorId": SAGE, "sizeId": LARGE}},
        )
        assert r.status_code == 200
        assert "guestId" in r.cookies
        cart = r.json()["data"]
        assert cart["totalPrice"] == 22.49
        assert cart["items"][0]["product"]["name"] == "Classic Jar"

        again = client.get("/api/cart").json()["data"]
        assert again["id"] == cart["id"]

    def test_bad_quantity(self, client):
        r = client.post("/api/cart/items", json={"productId": JAR, "quantity": 0})
        assert r.status_code == 400
        assert r.json()["errors"] == {"quantity": "Quantity must be at least 1"}

    def test_malformed_body(self, client):
        r = client.post("/api/cart/items", json={"productId": JAR, "quantity": "lots"})
        assert r.status_code == 400
        assert r.json()["message"] == "Invalid request"
        assert "quantity" in r.json()["errors"]

    def test_update_remove_and_clear(self, client):
        cart = client.post("/api/cart/items", json={"productId": TIN, "quantity": 1}).json()["data"]
        item_id = cart["items"][0]["id"]

        r = client.put(f"/api/cart/items/{item_id}", json={"quantity": 3})
        assert r.json()["data"]["totalPrice"] == 53.97

        r = client.put(f"/api/cart/items/{item_id}", json={"quantity": 9})
        assert r.status_code == 400

        r = client.delete(f"/api/cart/items/{item_id}")
        assert r.json()["data"]["items"] == []

        assert client.delete("/api/cart").json()["data"]["totalPrice"] == 0.0

    def test_merge_on_login(self, client):
        client.post("/api/cart/items", json={"productId": JAR, "quantity": 2})
        r = client.post("/api/cart/merge", headers=USER)
        assert r.status_code == 200
        body = r.json()
        assert body["data"]["userId"] == "user-1"
        assert body["data"]["totalItems"] == 2
        assert body["skipped"] == []

    def test_merge_requires_login(self, client):
        r = client.post("/api/cart/merge", json={"guestId": "x"})
        assert r.status_code == 401


class TestCheckoutAndOrders:

    def _fill_cart(self, client) -> str:
        client.post("/api/cart/items", headers=USER, json={"productId": JAR, "quantity": 1})
        r = client.post("/api/cart/items", headers=USER, json={"productId": TIN, "quantity": 2})
        return r.json()["data"]["id"]

    def _checkout(self, client, cart_id: str):
        return client.post(
            "/api/checkout/process",
            headers=USER,
            json={
                "cartId": cart_id,
                "email": "ada@example.com",
                "shippingAddress": ADDRESS,
                "billingAddress": ADDRESS,
                "paymentDetails": {"method": "card", "transactionId": "tx_1"},
            },
        )

    def test_preview_and_shipping(self, client):
        cart_id = self._fill_cart(client)
        preview = client.post("/api/checkout/validate", headers=USER, json={"cartId": cart_id}).json()
        assert preview["valid"] is True
        assert preview["pricing"] == {
            "subtotal": 51.97, "tax": 4.16, "shippingCost": 0.0, "totalPrice": 56.13,
        }
        quote = client.post("/api/checkout/shipping", headers=USER, json={"cartId": cart_id}).json()
        assert quote["shippingCost"] == 0.0
        assert quote["amountToFreeShipping"] == 0.0

    def test_checkout_creates_order(self, client):
        cart_id = self._fill_cart(client)
        r = self._checkout(client, cart_id)
        assert r.status_code == 201
        order = r.json()["order"]
        assert order["totalPrice"] == 56.13
        assert order["status"] == "pending"
        assert order["orderNumber"].startswith("ORD-")

        assert client.get("/api/cart", headers=USER).json()["data"]["items"] == []

        detail = client.get(f"/api/orders/{order['id']}", headers=USER).json()["data"]
        assert detail["shippingAddress"]["zipCode"] == "97201"
        assert detail["items"][0]["productSnapshot"]["name"] == "Classic Jar"

        assert client.get(f"/api/orders/{order['id']}", headers={"X-User-Id": "user-2"}).status_code == 403

        tracked = client.get(f"/api/orders/track/{order['orderNumber'].lower()}").json()["data"]
        assert tracked["status"] == "pending"
        assert "email" not in tracked

        listed = client.get("/api/orders", headers=USER).json()
        assert listed["count"] == 1

    def test_checkout_with_missing_fields(self, client):
        cart_id = self._fill_cart(client)
        r = client.post("/api/checkout/process", headers=USER, json={"cartId": cart_id})
        assert r.status_code == 400
        assert r.json()["message"] == "Missing required checkout fields"

    def test_admin_status_flow(self, client):
        order = self._checkout(client, self._fill_cart(client)).json()["order"]

        r = client.put(f"/api/orders/{order['id']}/status", headers=USER, json={"status": "shipped"})
        assert r.status_code == 403

        r = client.put(
            f"/api/orders/{order['id']}/status",
            headers=ADMIN,
            json={"status": "shipped", "trackingNumber": "1Z999"},
        )
        assert r.status_code == 200
        assert r.json()["data"]["trackingNumber"] == "1Z999"

        r = client.put(f"/api/orders/{order['id']}/status", headers=ADMIN, json={"status": "pending"})
        assert r.status_code == 400

        r = client.put(f"/api/orders/{order['id']}/status", headers=ADMIN, json={"status": "lost"})
        assert r.json()["errors"] == {"status": "Invalid status value"}

        r = client.get("/api/orders", headers=ADMIN, params={"all": "true", "status": "shipped"})
        assert r.json()["count"] == 1

    def test_tracking_ships_pending_order(self, client):
        order = self._checkout(client, self._fill_cart(client)).json()["order"]

        r = client.put(
            f"/api/orders/{order['id']}/tracking",
            headers=ADMIN,
            json={"trackingNumber": "1Z999", "carrier": "UPS"},
        )
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["status"] == "shipped"
        assert data["trackingNumber"] == "1Z999"
        assert data["carrier"] == "UPS"

        tracked = client.get(f"/api/orders/track/{order['orderNumber']}").json()["data"]
        assert tracked["carrier"] == "UPS"

        r = client.put(f"/api/orders/{order['id']}/tracking", headers=ADMIN, json={})
        assert r.status_code == 400

    def test_confirm_payment(self, client):
        order = self._checkout(client, self._fill_cart(client)).json()["order"]
        r = client.post(f"/api/orders/{order['id']}/payment/confirm", headers=USER)
        assert r.json()["data"]["paymentStatus"] == "completed"
        again = client.post(f"/api/orders/{order['id']}/payment/confirm", headers=USER)
        assert again.status_code == 400


class TestErrorHandling:

    def _app_with_failing_route(self, tmp_path, **settings):
        app = create_app(_settings(tmp_path, **settings))

        def boom():
            raise RuntimeError("kaboom")

        app.add_api_route("/boom", boom)
        return app

    def test_unexpected_error_shows_detail_in_development(self, tmp_path):
        with TestClient(self._app_with_failing_route(tmp_path), raise_server_exceptions=False) as c:
            r = c.get("/boom")
        assert r.status_code == 500
        assert r.json() == {"success": False, "message": "kaboom"}

    def test_unexpected_error_is_generic_in_production(self, tmp_path):
        app = self._app_with_failing_route(tmp_path, environment="production")
        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.get("/boom")
        assert r.json() == {"success": False, "message": "Internal server error"}

    def test_unknown_route(self, client):
        r = client.get("/api/nowhere")
        assert r.status_code == 404
        assert r.json()["success"] is False

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"
