import pytest
from protean.integrations.pytest import DomainFixture

from ordering.cart.line_item import ProductSnapshot
from ordering.cart.store import CartStore
from ordering.lifecycle.history import OrderHistory
from ordering.storage.memory_adapter import InMemoryStore


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    """Push domain context before each test, cleanup after."""
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


def product_payload(product_id="1", price=1000, stock=5, title=None, **overrides):
    payload = {
        "id": product_id,
        "title": title or f"Product {product_id}",
        "description": "A product",
        "price": price,
        "imageUrl": f"https://images.example.com/{product_id}.jpg",
        "category": "Audio",
        "stock": stock,
        "createdAt": "2024-01-01T00:00:00+00:00",
        "updatedAt": "2024-01-01T00:00:00+00:00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_product():
    """Factory for product snapshots: ``make_product("1", price=1000)``."""

    def _make(product_id="1", price=1000, stock=5, **overrides):
        return ProductSnapshot.from_payload(product_payload(product_id, price=price, stock=stock, **overrides))

    return _make


@pytest.fixture()
def storage():
    return InMemoryStore()


@pytest.fixture()
def cart(storage):
    return CartStore(storage)


@pytest.fixture()
def history(storage):
    return OrderHistory(storage)


@pytest.fixture()
def valid_customer():
    return {
        "name": "Hanako Yamada",
        "email": "hanako@example.com",
        "address": "1-2-3 Shibuya",
        "city": "Tokyo",
        "postal_code": "150-0002",
    }


@pytest.fixture()
def product_data():
    """Factory for camelCase product payloads, as stored in a cart snapshot."""
    return product_payload
