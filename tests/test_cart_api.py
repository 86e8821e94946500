"""
Component tests for the cart endpoints.

These go through the real FastAPI app (routers, services, in-memory
repositories, exception handlers) and check the JSON envelope and
status codes clients depend on.
"""
import uuid

import pytest
from fastapi.testclient import TestClient

CART = "/api/cart"
HEADPHONES = "Wireless Bluetooth Headphones"


def add(client: TestClient, product_id, quantity=1, session_id="s1"):
    return client.post(
        CART,
        json={"productId": str(product_id), "quantity": quantity, "sessionId": session_id},
    )


def get_cart(client: TestClient, session_id="s1"):
    return client.get(CART, params={"sessionId": session_id}).json()


class TestAddToCart:

    def test_first_add_returns_201_with_line_item(self, client, catalog):
        """
        Validates:
        - 201 and envelope {success, data, message}
        - data carries the snapshot fields and camelCase keys
        """
        product = catalog[HEADPHONES]

        response = add(client, product.id)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Item added to cart successfully"
        item = body["data"]
        assert item["productId"] == str(product.id)
        assert item["sessionId"] == "s1"
        assert item["name"] == HEADPHONES
        assert item["price"] == 99.99
        assert item["quantity"] == 1
        assert item["totalPrice"] == 99.99
        assert "product" not in item

    def test_repeat_add_returns_200_and_increments(self, client, catalog):
        product = catalog[HEADPHONES]
        add(client, product.id, 1)

        response = add(client, product.id, 2)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Cart updated successfully"
        assert body["data"]["quantity"] == 3

        cart = get_cart(client)
        assert cart["summary"] == {"total": "299.97", "itemCount": 3}

    def test_quantity_defaults_to_one(self, client, catalog):
        product = catalog["Laptop Stand"]

        response = client.post(CART, json={"productId": str(product.id), "sessionId": "s1"})

        assert response.json()["data"]["quantity"] == 1

    def test_missing_product_id_is_400(self, client):
        response = client.post(CART, json={"quantity": 1, "sessionId": "s1"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Product ID is required"}

    @pytest.mark.parametrize("product_id", [uuid.uuid4(), "abc"])
    def test_unknown_product_is_404(self, client, product_id):
        response = add(client, product_id)

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_insufficient_stock_is_400_and_cart_unchanged(self, client, catalog):
        # Laptop Stand has 30 in stock
        product = catalog["Laptop Stand"]
        add(client, product.id, 20)

        response = add(client, product.id, 11)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Insufficient stock"}
        assert get_cart(client)["data"][0]["quantity"] == 20

    def test_zero_quantity_is_validation_error(self, client, catalog):
        response = add(client, catalog[HEADPHONES].id, 0)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation Error"
        assert body["errors"]


class TestGetCart:

    def test_envelope_and_aggregates(self, client, catalog):
        add(client, catalog["USB-C Cable"].id, 2)
        add(client, catalog["Smartphone Case"].id, 1)

        cart = get_cart(client)

        assert cart["success"] is True
        assert cart["sessionId"] == "s1"
        assert cart["count"] == 2
        assert [it["name"] for it in cart["data"]] == ["USB-C Cable", "Smartphone Case"]
        # 14.99 * 2 + 24.99
        assert cart["summary"] == {"total": "54.97", "itemCount": 3}

    def test_lines_carry_the_live_product(self, client, catalog):
        product = catalog[HEADPHONES]
        add(client, product.id, 2)

        line = get_cart(client)["data"][0]

        assert line["product"]["id"] == str(product.id)
        assert line["product"]["stock"] == 50
        assert line["product"]["inStock"] is True

    def test_empty_cart(self, client):
        cart = get_cart(client, "empty")

        assert cart["data"] == []
        assert cart["summary"] == {"total": "0.00", "itemCount": 0}

    def test_header_session_takes_precedence(self, client, catalog):
        add(client, catalog[HEADPHONES].id, 1, session_id="from-header")

        response = client.get(
            CART, params={"sessionId": "other"}, headers={"X-Session-Id": "from-header"}
        )

        assert response.headers["X-Session-Id"] == "from-header"
        assert response.json()["count"] == 1


class TestSessionIssuing:
    """Without DEFAULT_SESSION_ID, anonymous callers get their own cart."""

    def test_server_issues_session_id(self, client, catalog):
        response = client.post(CART, json={"productId": str(catalog[HEADPHONES].id)})

        issued = response.headers["X-Session-Id"]
        assert issued
        assert response.json()["data"]["sessionId"] == issued

    def test_anonymous_callers_do_not_share_a_cart(self, client, catalog):
        client.post(CART, json={"productId": str(catalog[HEADPHONES].id)})

        response = client.get(CART)

        assert response.json()["count"] == 0
        assert response.headers["X-Session-Id"]


class TestDefaultSession:

    @pytest.fixture
    def settings(self, settings):
        return settings.model_copy(update={"DEFAULT_SESSION_ID": "default_session"})

    def test_anonymous_callers_share_the_default_cart(self, client, catalog):
        client.post(CART, json={"productId": str(catalog[HEADPHONES].id)})

        cart = client.get(CART).json()

        assert cart["sessionId"] == "default_session"
        assert cart["count"] == 1


class TestUpdateCartItem:

    def test_update_quantity(self, client, catalog):
        item = add(client, catalog["Wireless Mouse"].id, 1).json()["data"]

        response = client.put(
            f"{CART}/{item['id']}", json={"quantity": 4, "sessionId": "s1"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Cart item updated successfully"
        assert body["data"]["quantity"] == 4

    def test_quantity_zero_removes_item(self, client, catalog):
        item = add(client, catalog["Wireless Mouse"].id, 2).json()["data"]

        response = client.put(
            f"{CART}/{item['id']}", json={"quantity": 0, "sessionId": "s1"}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Item removed from cart"}
        assert get_cart(client)["summary"] == {"total": "0.00", "itemCount": 0}

    def test_negative_quantity_is_400(self, client, catalog):
        item = add(client, catalog["Wireless Mouse"].id, 1).json()["data"]

        response = client.put(
            f"{CART}/{item['id']}", json={"quantity": -1, "sessionId": "s1"}
        )

        assert response.status_code == 400

    def test_above_stock_is_400(self, client, catalog):
        # Desk Organizer has 45 in stock
        item = add(client, catalog["Desk Organizer"].id, 1).json()["data"]

        response = client.put(
            f"{CART}/{item['id']}", json={"quantity": 46, "sessionId": "s1"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Insufficient stock"

    @pytest.mark.parametrize("quantity", [0, 3])
    def test_unknown_item_is_404(self, client, quantity):
        response = client.put(
            f"{CART}/{uuid.uuid4()}", json={"quantity": quantity, "sessionId": "s1"}
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Cart item not found"

    def test_item_of_other_session_is_404(self, client, catalog):
        item = add(client, catalog["Wireless Mouse"].id, 1).json()["data"]

        response = client.put(
            f"{CART}/{item['id']}", json={"quantity": 2, "sessionId": "someone-else"}
        )

        assert response.status_code == 404


class TestDeleteCartItem:

    def test_delete_item(self, client, catalog):
        item = add(client, catalog["Laptop Stand"].id, 1).json()["data"]

        response = client.delete(f"{CART}/{item['id']}", params={"sessionId": "s1"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Item removed from cart successfully",
        }
        assert get_cart(client)["count"] == 0

    def test_delete_unknown_item_is_404(self, client):
        response = client.delete(f"{CART}/{uuid.uuid4()}", params={"sessionId": "s1"})

        assert response.status_code == 404
        assert response.json()["success"] is False


class TestClearCart:

    def test_clear_leaves_other_sessions_untouched(self, client, catalog):
        add(client, catalog["Laptop Stand"].id, 1, session_id="s1")
        add(client, catalog["Laptop Stand"].id, 2, session_id="s2")

        response = client.delete(CART, params={"sessionId": "s1"})

        assert response.status_code == 200
        assert response.json()["message"] == "Cart cleared successfully"
        assert get_cart(client, "s1")["count"] == 0
        assert get_cart(client, "s2")["summary"]["itemCount"] == 2
