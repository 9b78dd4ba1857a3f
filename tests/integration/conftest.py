"""Fixtures for cross-domain tests against the composed application.

The app pushes the right domain context per request, so these tests only
push a context themselves when inspecting repositories directly.
"""

import pytest
from fastapi.testclient import TestClient

from ordering.storage import set_store
from ordering.storage.memory_adapter import InMemoryStore
from payments.gateway import set_gateway
from payments.gateway.fake_adapter import FakeGateway


@pytest.fixture(scope="session")
def app():
    from app import app as storefront_app

    return storefront_app


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def client(app, gateway):
    set_store(InMemoryStore())
    return TestClient(app)


@pytest.fixture(autouse=True)
def run_around_tests(app):
    """Cleanup both domains after every test."""
    yield

    from catalogue.domain import catalogue
    from ordering.domain import ordering

    for domain in (catalogue, ordering):
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            domain.event_store.store._data_reset()
