"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and StripeGateway
(production) without changing any checkout code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentIntentResult:
    """Result of a payment intent creation attempt."""

    success: bool
    payment_intent_id: str | None = None
    client_secret: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        idempotency_key: str | None = None,
    ) -> PaymentIntentResult:
        """Open a payment intent for ``amount`` (smallest currency unit).

        ``metadata`` is attached to the intent verbatim; checkout uses it to
        correlate the intent with its order.
        """
        ...
