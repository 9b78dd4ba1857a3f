"""Checkout Orchestrator — one checkout attempt, start to finish.

State Machine:
    IDLE → SUBMITTING → AWAITING_PAYMENT → FINALIZING → SUCCEEDED
    SUBMITTING / AWAITING_PAYMENT → FAILED

``submit`` validates the cart and customer details, persists the order and
opens a payment intent. ``confirm_payment`` is driven by the payment widget's
completion callback and only accepts a pending order; on success the
persisted order (its items and the total sent to the processor) is written to
history and the cart is cleared. A failure never touches the cart or the history.

One attempt per instance; callers must not submit twice concurrently.
"""

from dataclasses import dataclass
from enum import Enum

import structlog

from ordering.cart.codec import decode_line_item
from ordering.cart.store import CartStore
from ordering.checkout.errors import (
    CheckoutError,
    DecodeError,
    EmptyCartError,
    InvalidCheckoutState,
    PaymentConfirmationError,
)
from ordering.checkout.intent import PaymentSession, open_payment_intent
from ordering.checkout.submission import build_submission
from ordering.lifecycle.history import OrderHistory
from ordering.order.order import OrderStatus

logger = structlog.get_logger(__name__)

PAYMENT_FAILED_PREFIX = "Payment failed: "
UNKNOWN_PAYMENT_ERROR = "An unknown error occurred"


class CheckoutState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    AWAITING_PAYMENT = "awaiting_payment"
    FINALIZING = "finalizing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class PaymentConfirmation:
    """Outcome reported by the payment widget."""

    succeeded: bool
    message: str | None = None


class CheckoutOrchestrator:
    def __init__(self, cart: CartStore, history: OrderHistory, orders, gateway, currency: str) -> None:
        self.cart = cart
        self.history = history
        self.orders = orders
        self.gateway = gateway
        self.currency = currency

        self.state = CheckoutState.IDLE
        self.session: PaymentSession | None = None
        self.order_id: str | None = None
        self.error: Exception | None = None
        self.message: str | None = None

    @classmethod
    def resume(cls, order_id: str, cart: CartStore, history: OrderHistory, orders, gateway, currency: str):
        """An orchestrator waiting on payment for an order created earlier."""
        orchestrator = cls(cart, history, orders, gateway, currency)
        orchestrator.order_id = str(order_id)
        orchestrator.state = CheckoutState.AWAITING_PAYMENT
        return orchestrator

    def _require(self, *states):
        if self.state not in states:
            expected = ", ".join(state.value for state in states)
            raise InvalidCheckoutState(f"Checkout is {self.state.value}, expected {expected}")

    def _fail(self, error: CheckoutError, message: str):
        self.state = CheckoutState.FAILED
        self.error = error
        self.message = message
        logger.warning(
            "checkout_failed",
            order_id=self.order_id or error.order_id,
            error_type=type(error).__name__,
            error=str(error),
        )

    def submit(self, customer_info) -> PaymentSession | None:
        """Start checkout for the current cart.

        Returns the payment session, or None when a collaborator failed (the
        orchestrator is then ``FAILED``). Invalid input raises
        ``ValidationError`` / ``EmptyCartError`` and leaves the state ``IDLE``.
        """
        self._require(CheckoutState.IDLE)

        items = self.cart.load()
        if not items:
            raise EmptyCartError()
        submission = build_submission(items, customer_info)

        self.state = CheckoutState.SUBMITTING
        try:
            session = open_payment_intent(submission, self.orders, self.gateway, self.currency)
        except CheckoutError as exc:
            self.order_id = exc.order_id
            self._fail(exc, exc.user_message)
            return None

        self.session = session
        self.order_id = session.order_id
        self.state = CheckoutState.AWAITING_PAYMENT
        return session

    def confirm_payment(self, confirmation: PaymentConfirmation) -> bool:
        """Handle the payment widget's verdict. Returns True when checkout succeeded.

        Raises ``InvalidCheckoutState`` unless the order is still pending, and
        ``DecodeError`` (leaving the state ``AWAITING_PAYMENT`` and the cart
        intact) when the stored history cannot be read.
        """
        self._require(CheckoutState.AWAITING_PAYMENT)

        order = self.orders.get_order_by_id(self.order_id)
        if order is None or order.status != OrderStatus.PENDING.value:
            status = order.status if order is not None else "missing"
            raise InvalidCheckoutState(f"Order {self.order_id} is {status}, not awaiting payment")

        if not confirmation.succeeded:
            message = PAYMENT_FAILED_PREFIX + (confirmation.message or UNKNOWN_PAYMENT_ERROR)
            self._fail(PaymentConfirmationError(confirmation.message, order_id=self.order_id), message)
            return False

        self.state = CheckoutState.FINALIZING
        items = tuple(decode_line_item(item.to_line_item_payload()) for item in order.items)
        try:
            self.history.record_completed_order(self.order_id, items, order.total_amount)
        except DecodeError:
            self.state = CheckoutState.AWAITING_PAYMENT
            raise
        self.cart.clear()

        self.state = CheckoutState.SUCCEEDED
        logger.info("checkout_succeeded", order_id=self.order_id, total_amount=order.total_amount)
        return True
