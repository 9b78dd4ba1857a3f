"""Configurable fake payment gateway for development and testing.

This adapter simulates a real payment gateway without any external calls.
It can be configured at runtime to succeed, fail, or raise, making it
useful for:
- Manual API testing via /payments/gateway/configure
- Automated tests with predictable outcomes
- Development without real gateway credentials
"""

from uuid import uuid4

from payments.gateway.port import PaymentGateway, PaymentIntentResult


class GatewayUnavailable(Exception):
    """Raised by FakeGateway when configured to simulate an outage."""


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.should_raise: bool = False
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Card declined",
        should_raise: bool = False,
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.should_raise = should_raise

    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        idempotency_key: str | None = None,
    ) -> PaymentIntentResult:
        call = {
            "method": "create_payment_intent",
            "amount": amount,
            "currency": currency,
            "metadata": dict(metadata),
            "idempotency_key": idempotency_key,
        }
        self.calls.append(call)

        if self.should_raise:
            raise GatewayUnavailable(self.failure_reason)

        if self.should_succeed:
            intent_id = f"pi_fake_{uuid4().hex[:16]}"
            return PaymentIntentResult(
                success=True,
                payment_intent_id=intent_id,
                client_secret=f"{intent_id}_secret_{uuid4().hex[:12]}",
                gateway_status="requires_payment_method",
            )
        return PaymentIntentResult(
            success=False,
            gateway_status="failed",
            failure_reason=self.failure_reason,
        )
