import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers

from ordering.api.routes import cart_router, checkout_router, orders_router, payment_intent_router
from ordering.cart.catalog import StaticCatalogue, set_catalog_reader
from ordering.storage import set_store
from ordering.storage.memory_adapter import InMemoryStore
from payments.gateway import set_gateway
from payments.gateway.fake_adapter import FakeGateway


@pytest.fixture()
def backend():
    store = InMemoryStore()
    set_store(store)
    return store


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def catalogue_products(product_data):
    products = [
        product_data("1", price=1000, stock=5),
        product_data("2", price=2000, stock=20),
        product_data("sold-out", price=3000, stock=0),
    ]
    set_catalog_reader(StaticCatalogue(products))
    return products


@pytest.fixture()
def client(backend, gateway, catalogue_products):
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(orders_router)
    app.include_router(payment_intent_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def customer_payload():
    return {
        "name": "Hanako Yamada",
        "email": "hanako@example.com",
        "address": "1-2-3 Shibuya",
        "city": "Tokyo",
        "postalCode": "150-0002",
    }
