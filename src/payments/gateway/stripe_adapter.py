"""Stripe payment gateway adapter.

Creates PaymentIntents through the stripe-python SDK. The API key is passed
per request rather than set on the ``stripe`` module, so several gateways
with different keys can coexist in one process.
"""

import stripe
import structlog

from payments.gateway.port import PaymentGateway, PaymentIntentResult

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, api_version: str | None = None) -> None:
        self.api_key = api_key
        self.api_version = api_version

    def _request_options(self, idempotency_key: str | None) -> dict:
        options = {"api_key": self.api_key}
        if self.api_version:
            options["stripe_version"] = self.api_version
        if idempotency_key:
            options["idempotency_key"] = idempotency_key
        return options

    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        idempotency_key: str | None = None,
    ) -> PaymentIntentResult:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                metadata=metadata,
                automatic_payment_methods={"enabled": True},
                **self._request_options(idempotency_key),
            )
        except stripe.StripeError as exc:
            logger.warning(
                "stripe_payment_intent_failed",
                amount=amount,
                currency=currency,
                error=exc.user_message or str(exc),
            )
            return PaymentIntentResult(
                success=False,
                gateway_status="failed",
                failure_reason=exc.user_message or str(exc),
            )

        return PaymentIntentResult(
            success=True,
            payment_intent_id=intent.id,
            client_secret=intent.client_secret,
            gateway_status=intent.status,
        )
