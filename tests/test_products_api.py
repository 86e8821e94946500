"""
Component tests for the product endpoints.
"""
import uuid

from storefront.seed import SAMPLE_PRODUCTS

PRODUCTS = "/api/products"

NEW_PRODUCT = {
    "name": "Paperback Novel",
    "description": "A page-turner.",
    "price": 12.5,
    "image": "https://example.com/book.png",
    "category": "Books",
    "stock": 7,
}


class TestListProducts:

    def test_lists_seeded_catalog(self, client):
        response = client.get(PRODUCTS)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == len(SAMPLE_PRODUCTS)
        first = body["data"][0]
        assert {"id", "name", "price", "stock", "category", "inStock", "createdAt"} <= set(first)

    def test_filters_sort_and_limit(self, client):
        response = client.get(
            PRODUCTS, params={"category": "Electronics", "sort": "price-high", "limit": 1}
        )

        body = response.json()
        assert body["count"] == 1
        assert body["data"][0]["name"] == "Wireless Bluetooth Headphones"

    def test_search(self, client):
        body = client.get(PRODUCTS, params={"search": "usb"}).json()

        assert [p["name"] for p in body["data"]] == ["USB-C Cable"]

    def test_unknown_sort_falls_back_to_newest(self, client):
        response = client.get(PRODUCTS, params={"sort": "bogus"})

        assert response.status_code == 200
        assert response.json()["count"] == len(SAMPLE_PRODUCTS)

    def test_category_route(self, client):
        body = client.get(f"{PRODUCTS}/category/office").json()

        assert {p["name"] for p in body["data"]} == {"Laptop Stand", "Desk Organizer"}


class TestGetProduct:

    def test_found(self, client, catalog):
        product = catalog["Wireless Mouse"]

        response = client.get(f"{PRODUCTS}/{product.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Wireless Mouse"
        assert data["stock"] == 75
        assert data["inStock"] is True

    def test_unknown_id_is_404(self, client):
        response = client.get(f"{PRODUCTS}/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}

    def test_malformed_id_is_404(self, client):
        assert client.get(f"{PRODUCTS}/not-an-id").status_code == 404


class TestAdminProducts:

    def test_create_requires_token(self, client):
        response = client.post(PRODUCTS, json=NEW_PRODUCT)

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_create_requires_admin_role(self, client, user_headers):
        response = client.post(PRODUCTS, json=NEW_PRODUCT, headers=user_headers)

        assert response.status_code == 403

    def test_admin_creates_product(self, client, admin_headers):
        response = client.post(PRODUCTS, json=NEW_PRODUCT, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Product created successfully"
        assert body["data"]["category"] == "Books"

        listed = client.get(PRODUCTS).json()["data"]
        assert listed[0]["name"] == "Paperback Novel"

    def test_invalid_category_is_400(self, client, admin_headers):
        response = client.post(
            PRODUCTS, json={**NEW_PRODUCT, "category": "Groceries"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation Error"

    def test_negative_price_is_400(self, client, admin_headers):
        response = client.post(
            PRODUCTS, json={**NEW_PRODUCT, "price": -1}, headers=admin_headers
        )

        assert response.status_code == 400

    def test_stock_adjustment(self, client, catalog, admin_headers):
        product = catalog["Laptop Stand"]
        url = f"{PRODUCTS}/{product.id}/stock"

        down = client.post(url, json={"operation": "decrease", "amount": 10}, headers=admin_headers)
        up = client.post(url, json={"operation": "increase", "amount": 5}, headers=admin_headers)
        too_much = client.post(
            url, json={"operation": "decrease", "amount": 1000}, headers=admin_headers
        )

        assert down.json()["data"]["stock"] == 20
        assert up.json()["data"]["stock"] == 25
        assert too_much.status_code == 400
        assert client.get(f"{PRODUCTS}/{product.id}").json()["data"]["stock"] == 25


class TestRootAndErrors:

    def test_root(self, client):
        body = client.get("/").json()

        assert body["endpoints"]["cart"] == "/api/cart"

    def test_unknown_route_uses_envelope(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route not found"}
