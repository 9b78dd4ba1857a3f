"""Integration tests for POST /api/create-payment-intent."""

import pytest
from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderStatus


@pytest.fixture()
def body(product_data, customer_payload):
    return {
        "items": [{"productId": "1", "product": product_data("1", price=1000), "quantity": 2}],
        "totalAmount": 2000,
        "customerInfo": customer_payload,
    }


class TestCreatePaymentIntent:
    def test_returns_client_secret_and_order_id(self, client, gateway, body):
        response = client.post("/api/create-payment-intent", json=body)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"clientSecret", "orderId"}

        order = current_domain.repository_for(Order).get(data["orderId"])
        assert order.status == OrderStatus.PENDING.value
        assert order.user_id == "anonymous"

        (call,) = gateway.calls
        assert call["amount"] == 2000
        assert call["currency"] == "jpy"
        assert call["metadata"] == {
            "orderId": data["orderId"],
            "customerName": "Hanako Yamada",
            "customerEmail": "hanako@example.com",
        }

    def test_uses_submitted_total(self, client, gateway, body):
        client.post("/api/create-payment-intent", json={**body, "totalAmount": 1500})
        assert gateway.calls[0]["amount"] == 1500

    def test_gateway_failure_is_generic_500(self, client, gateway, body):
        gateway.configure(should_succeed=False, failure_reason="No such customer: cus_123")

        response = client.post("/api/create-payment-intent", json=body)

        assert response.status_code == 500
        assert response.json() == {"error": "Payment intent creation failed"}

    def test_failed_intent_leaves_order_cancelled(self, client, gateway, body):
        gateway.configure(should_succeed=True, should_raise=True)
        client.post("/api/create-payment-intent", json=body)

        (order,) = current_domain.repository_for(Order)._dao.query.all().items
        assert order.status == OrderStatus.CANCELLED.value

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"items": [], "totalAmount": 0, "customerInfo": {}},
            {"items": "nope", "totalAmount": 100, "customerInfo": {"name": "x"}},
        ],
    )
    def test_malformed_body_is_generic_500(self, client, gateway, payload):
        response = client.post("/api/create-payment-intent", json=payload)

        assert response.status_code == 500
        assert response.json() == {"error": "Payment intent creation failed"}
        assert gateway.calls == []

    def test_invalid_json_is_generic_500(self, client):
        response = client.post(
            "/api/create-payment-intent", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 500
