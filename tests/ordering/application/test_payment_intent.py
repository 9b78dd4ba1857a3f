import pytest

from ordering.cart.line_item import CartLineItem
from ordering.checkout.errors import PaymentIntentError, PersistenceError
from ordering.checkout.intent import COMPENSATION_REASON, open_payment_intent
from ordering.checkout.submission import build_submission
from ordering.order.order import OrderStatus
from ordering.order.service import OrderService
from payments.gateway.fake_adapter import FakeGateway, GatewayUnavailable


class FailingOrders:
    def create_order(self, items, total_amount, user_id="anonymous"):
        raise ConnectionError("database unavailable")


@pytest.fixture()
def submission(make_product, valid_customer):
    items = (CartLineItem(product=make_product("1", price=1000), quantity=2),)
    return build_submission(items, valid_customer)


@pytest.fixture()
def gateway():
    return FakeGateway()


class TestOpenPaymentIntent:
    def test_creates_order_then_intent(self, submission, gateway):
        orders = OrderService()
        session = open_payment_intent(submission, orders, gateway, "jpy")

        order = orders.get_order_by_id(session.order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.total_amount == 2000
        assert order.stripe_payment_intent_id == session.payment_intent_id
        assert session.client_secret

    def test_intent_carries_order_metadata(self, submission, gateway):
        session = open_payment_intent(submission, OrderService(), gateway, "jpy")

        (call,) = gateway.calls
        assert call["amount"] == 2000
        assert call["currency"] == "jpy"
        assert call["metadata"] == {
            "orderId": session.order_id,
            "customerName": "Hanako Yamada",
            "customerEmail": "hanako@example.com",
        }
        assert call["idempotency_key"] == f"order-{session.order_id}"

    def test_order_creation_failure(self, submission, gateway):
        with pytest.raises(PersistenceError) as exc:
            open_payment_intent(submission, FailingOrders(), gateway, "jpy")

        assert "database unavailable" in str(exc.value)
        assert gateway.calls == []

    def test_declined_intent_cancels_order(self, submission, gateway):
        gateway.configure(should_succeed=False, failure_reason="Amount too small")
        orders = OrderService()

        with pytest.raises(PaymentIntentError) as exc:
            open_payment_intent(submission, orders, gateway, "jpy")

        order = orders.get_order_by_id(exc.value.order_id)
        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancellation_reason == COMPENSATION_REASON

    def test_gateway_exception_cancels_order(self, submission, gateway):
        gateway.configure(should_succeed=True, should_raise=True)
        orders = OrderService()

        with pytest.raises(PaymentIntentError) as exc:
            open_payment_intent(submission, orders, gateway, "jpy")

        assert isinstance(exc.value.__cause__, GatewayUnavailable)
        assert orders.get_order_by_id(exc.value.order_id).status == OrderStatus.CANCELLED.value

    def test_compensation_failure_still_reports_intent_error(self, submission, gateway):
        class UncancellableOrders(OrderService):
            def cancel_order(self, order_id, reason):
                raise ConnectionError("database unavailable")

        gateway.configure(should_succeed=False)
        with pytest.raises(PaymentIntentError):
            open_payment_intent(submission, UncancellableOrders(), gateway, "jpy")
