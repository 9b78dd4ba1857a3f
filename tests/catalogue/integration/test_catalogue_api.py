"""Integration tests for Catalogue API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain

from catalogue.api import product_router
from catalogue.product.product import Product


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    register_exception_handlers(app)
    return TestClient(app)


def _create(client, **overrides):
    body = {"title": "Smartwatch", "price": 25000, "imageUrl": "https://images.example.com/w.jpg", "stock": 30}
    body.update(overrides)
    response = client.post("/products", json=body)
    assert response.status_code == 201
    return response.json()["product_id"]


class TestCreateProductEndpoint:
    def test_create_product(self, client):
        product_id = _create(client)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.title == "Smartwatch"
        assert product.image_url == "https://images.example.com/w.jpg"

    def test_negative_price_rejected(self, client):
        response = client.post("/products", json={"title": "Broken", "price": -1})
        assert response.status_code == 422


class TestReadEndpoints:
    def test_list_products(self, client):
        _create(client, title="Older")
        _create(client, title="Newer")

        response = client.get("/products")
        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["Newer", "Older"]

    def test_get_product_uses_camel_case(self, client):
        product_id = _create(client)

        data = client.get(f"/products/{product_id}").json()
        assert data["id"] == product_id
        assert data["imageUrl"] == "https://images.example.com/w.jpg"
        assert data["stock"] == 30

    def test_get_missing_product(self, client):
        assert client.get("/products/no-such-product").status_code == 404

    def test_listing_failure_degrades_to_error_body(self, client, monkeypatch):
        def broken():
            raise ConnectionError("datastore unavailable")

        monkeypatch.setattr("catalogue.api.routes.get_all_products", broken)

        response = client.get("/products")
        assert response.status_code == 503
        assert response.json() == {"error": "Products could not be loaded"}


class TestSeedEndpoint:
    def test_seed(self, client):
        response = client.post("/products/seed")

        assert response.status_code == 201
        assert len(response.json()["product_ids"]) == 6

    def test_seed_forbidden_in_production(self, client, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert client.post("/products/seed").status_code == 403
