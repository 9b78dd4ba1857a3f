"""Failure taxonomy for the cart and checkout flow.

Input problems (empty cart, missing customer details) are Protean
``ValidationError`` instances so the registered FastAPI handlers render them
as 400s with per-field messages. Collaborator failures during checkout derive
from ``CheckoutError`` and carry a message that is safe to show the shopper.
"""

from protean.exceptions import ValidationError


class EmptyCartError(ValidationError):
    """Checkout was attempted with nothing in the cart."""

    def __init__(self, messages=None):
        super().__init__(messages or {"cart": ["Cart is empty"]})


class CheckoutError(Exception):
    """A checkout step failed after validation passed."""

    user_message = "An error occurred during payment processing"

    def __init__(self, detail=None, *, order_id=None, user_message=None):
        super().__init__(detail or self.user_message)
        self.detail = detail
        self.order_id = order_id
        if user_message:
            self.user_message = user_message


class PersistenceError(CheckoutError):
    """The order record could not be created."""


class PaymentIntentError(CheckoutError):
    """The payment processor refused or failed to open a payment intent."""


class PaymentConfirmationError(CheckoutError):
    """The payment widget reported that collecting payment failed."""

    user_message = "Payment failed: An unknown error occurred"


class InvalidCheckoutState(Exception):
    """A checkout operation was called from a state that does not allow it."""


class DecodeError(ValueError):
    """Persisted client state could not be decoded."""

    def __init__(self, key, reason):
        super().__init__(f"Cannot decode {key!r}: {reason}")
        self.key = key
        self.reason = reason
