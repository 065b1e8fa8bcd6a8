"""Integration tests for product, cart and order API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from marketplace.api import register_error_handlers
from marketplace.api.routes import artisan_router, cart_router, order_router, product_router
from marketplace.catalogue.product import Product
from protean import current_domain

ARTISAN = {"X-Actor-Id": "artisan-001", "X-Actor-Roles": "artisan"}
BUYER = {"X-Actor-Id": "buyer-001", "X-Actor-Roles": "buyer"}
OTHER_BUYER = {"X-Actor-Id": "buyer-002", "X-Actor-Roles": "buyer"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(artisan_router)
    register_error_handlers(app)
    return TestClient(app)


def _create_product(client, name="Tote", price=20.0, stock=5):
    response = client.post("/products", json={"name": name, "price": price, "stock": stock}, headers=ARTISAN)
    assert response.status_code == 201
    return response.json()["id"]


def _place(client, items, total_amount, headers=BUYER):
    return client.post(
        "/orders",
        json={"items": items, "total_amount": total_amount, "pickup_address": "12 Mill Lane"},
        headers=headers,
    )


class TestProductEndpoints:
    def test_create_and_read(self, client):
        product_id = _create_product(client)
        response = client.get(f"/products/{product_id}")
        assert response.status_code == 200
        assert response.json()["stock"] == 5

    def test_buyers_cannot_create_products(self, client):
        response = client.post("/products", json={"name": "Tote", "price": 1.0}, headers=BUYER)
        assert response.status_code == 403


class TestCartEndpoints:
    def test_add_update_remove(self, client):
        product_id = _create_product(client)

        added = client.post("/cart/items", json={"product_id": product_id, "quantity": 2}, headers=BUYER)
        assert added.status_code == 200
        assert added.json()["total"] == 40.0

        updated = client.put(f"/cart/items/{product_id}", json={"quantity": 3}, headers=BUYER)
        assert updated.json()["items"][0]["quantity"] == 3

        removed = client.delete(f"/cart/items/{product_id}", headers=BUYER)
        assert removed.json()["items"] == []

    def test_add_beyond_stock(self, client):
        product_id = _create_product(client, stock=1)
        response = client.post("/cart/items", json={"product_id": product_id, "quantity": 2}, headers=BUYER)

        assert response.status_code == 400
        body = response.json()
        assert body["available"] == 1
        assert body["requested"] == 2

    def test_remove_unknown_item(self, client):
        product_id = _create_product(client)
        client.post("/cart/items", json={"product_id": product_id, "quantity": 1}, headers=BUYER)

        assert client.delete("/cart/items/prod-404", headers=BUYER).status_code == 400

    def test_clear(self, client):
        product_id = _create_product(client)
        client.post("/cart/items", json={"product_id": product_id, "quantity": 1}, headers=BUYER)

        response = client.delete("/cart", headers=BUYER)

        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_cart_requires_actor(self, client):
        assert client.get("/cart").status_code == 401


class TestOrderEndpoints:
    def test_place_order(self, client):
        product_id = _create_product(client, price=20.0, stock=5)
        client.post("/cart/items", json={"product_id": product_id, "quantity": 2}, headers=BUYER)

        response = _place(client, [{"product_id": product_id, "quantity": 2}], 40.0)

        assert response.status_code == 200
        body = response.json()
        assert body["total_amount"] == 40.0
        assert body["items"][0]["price"] == 20.0
        assert current_domain.repository_for(Product).get(product_id).stock == 3
        assert client.get("/cart", headers=BUYER).json()["items"] == []

    def test_insufficient_stock(self, client):
        product_id = _create_product(client, name="Scarf", stock=1)

        response = _place(client, [{"product_id": product_id, "quantity": 2}], 40.0)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Insufficient stock for Scarf. Available: 1, Requested: 2"
        assert body["product_id"] == product_id

    def test_empty_items(self, client):
        assert _place(client, [], 10.0).status_code == 400

    def test_missing_total(self, client):
        product_id = _create_product(client)
        response = client.post("/orders", json={"items": [{"product_id": product_id, "quantity": 1}]}, headers=BUYER)
        assert response.status_code == 400

    def test_mismatched_total(self, client):
        product_id = _create_product(client)
        assert _place(client, [{"product_id": product_id, "quantity": 1}], 5.0).status_code == 400

    def test_list_and_get(self, client):
        product_id = _create_product(client)
        order_id = _place(client, [{"product_id": product_id, "quantity": 1}], 20.0).json()["id"]

        assert len(client.get("/orders", headers=BUYER).json()) == 1
        assert client.get(f"/orders/{order_id}", headers=BUYER).status_code == 200
        assert client.get(f"/orders/{order_id}", headers=OTHER_BUYER).status_code == 403
        assert client.get("/orders/order-404", headers=BUYER).status_code == 404

    def test_artisan_orders(self, client):
        product_id = _create_product(client)
        _place(client, [{"product_id": product_id, "quantity": 1}], 20.0)

        response = client.get("/artisan/orders", headers=ARTISAN)

        assert response.status_code == 200
        assert response.json()[0]["items"][0]["product_id"] == product_id
        assert client.get("/artisan/orders", headers=BUYER).status_code == 403
