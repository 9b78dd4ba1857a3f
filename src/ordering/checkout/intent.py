"""Opening a payment for an order submission.

Two collaborator calls in sequence:
    1. persist the order as pending (its id is needed for step 2)
    2. ask the payment gateway for an intent carrying the order id as metadata

If step 2 fails after step 1 succeeded, the order is cancelled so no pending
order is left behind without a way to pay for it.
"""

from dataclasses import dataclass

import structlog

from ordering.checkout.errors import PaymentIntentError, PersistenceError
from ordering.checkout.submission import OrderSubmission

logger = structlog.get_logger(__name__)

COMPENSATION_REASON = "Payment intent could not be created"


@dataclass(frozen=True)
class PaymentSession:
    """What the payment widget needs to collect payment for an order."""

    order_id: str
    client_secret: str
    payment_intent_id: str | None = None
    total_amount: int = 0


def open_payment_intent(submission: OrderSubmission, orders, gateway, currency: str) -> PaymentSession:
    """Persist the order, then open a payment intent for it.

    Raises ``PersistenceError`` when the order cannot be created and
    ``PaymentIntentError`` when the gateway fails or refuses.
    """
    try:
        order_id = orders.create_order(submission.items, submission.total_amount)
    except Exception as exc:
        logger.error("order_creation_failed", total_amount=submission.total_amount, error=str(exc))
        raise PersistenceError(str(exc)) from exc

    info = submission.customer_info
    metadata = {
        "orderId": order_id,
        "customerName": info.name,
        "customerEmail": info.email,
    }

    try:
        result = gateway.create_payment_intent(
            amount=submission.total_amount,
            currency=currency,
            metadata=metadata,
            idempotency_key=f"order-{order_id}",
        )
        if not result.success:
            raise PaymentIntentError(result.failure_reason or "Payment intent was not created", order_id=order_id)
        if result.payment_intent_id:
            orders.attach_payment_intent(order_id, result.payment_intent_id)
    except Exception as exc:
        logger.error("payment_intent_failed", order_id=order_id, amount=submission.total_amount, error=str(exc))
        _compensate(orders, order_id)
        if isinstance(exc, PaymentIntentError):
            raise
        raise PaymentIntentError(str(exc), order_id=order_id) from exc

    logger.info(
        "payment_intent_created",
        order_id=order_id,
        payment_intent_id=result.payment_intent_id,
        amount=submission.total_amount,
        currency=currency,
    )
    return PaymentSession(
        order_id=order_id,
        client_secret=result.client_secret,
        payment_intent_id=result.payment_intent_id,
        total_amount=submission.total_amount,
    )


def _compensate(orders, order_id):
    """Cancel the pending order. A failure here is logged, not raised."""
    try:
        orders.cancel_order(order_id, COMPENSATION_REASON)
    except Exception as exc:
        logger.error("order_compensation_failed", order_id=order_id, error=str(exc))
