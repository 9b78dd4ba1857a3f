"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from pytest_bdd import given, parsers, then, when

from ordering.cart.line_item import ProductSnapshot, total_amount
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.order.service import OrderService
from payments.gateway.fake_adapter import FakeGateway


class TrackingOrders(OrderService):
    def __init__(self):
        self.created_ids = []

    def create_order(self, items, total_amount, user_id="anonymous"):
        order_id = super().create_order(items, total_amount, user_id)
        self.created_ids.append(order_id)
        return order_id


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def orders():
    return TrackingOrders()


@pytest.fixture()
def checkout(cart, history, orders, gateway):
    return CheckoutOrchestrator(cart=cart, history=history, orders=orders, gateway=gateway, currency="jpy")


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


def _snapshot(product_data, product_id, price):
    return ProductSnapshot.from_payload(product_data(product_id, price=price, stock=50))


# ---------------------------------------------------------------------------
# Cart steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('product "{product_id}" priced {price:d} is in the cart with quantity {qty:d}'))
def product_in_cart(cart, product_data, product_id, price, qty):
    cart.add(_snapshot(product_data, product_id, price), qty)


@when(parsers.cfparse('product "{product_id}" priced {price:d} is added with quantity {qty:d}'))
def add_product(cart, product_data, product_id, price, qty):
    cart.add(_snapshot(product_data, product_id, price), qty)


@when(parsers.cfparse('the quantity of product "{product_id}" is set to {qty:d}'))
def set_quantity(cart, product_id, qty):
    cart.set_quantity(product_id, qty)


@when("the cart is cleared")
def clear_cart(cart):
    cart.clear()


@then(parsers.cfparse("the cart total is {amount:d}"))
def cart_total(cart, amount):
    assert total_amount(cart.load()) == amount


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_lines(cart, count):
    assert len(cart.load()) == count


@then(parsers.cfparse("the cart still has {count:d} line"))
def cart_lines_unchanged(cart, count):
    assert len(cart.load()) == count


@then(parsers.cfparse('product "{product_id}" has quantity {qty:d}'))
def product_quantity(cart, product_id, qty):
    (item,) = [item for item in cart.load() if item.product_id == product_id]
    assert item.quantity == qty


@then("the cart is empty")
def cart_is_empty(cart):
    assert cart.load() == ()


@then(parsers.cfparse('nothing is stored under "{key}"'))
def nothing_stored(storage, key):
    assert storage.get(key) is None
