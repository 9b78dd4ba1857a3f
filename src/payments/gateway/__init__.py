"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- StripeGateway when STRIPE_SECRET_KEY is set
- FakeGateway otherwise (development and testing)
"""

import os

from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import PaymentGateway
from payments.gateway.stripe_adapter import StripeGateway

DEFAULT_CURRENCY = "jpy"

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        api_key = os.getenv("STRIPE_SECRET_KEY")
        if api_key:
            _current_gateway = StripeGateway(api_key=api_key, api_version=os.getenv("STRIPE_API_VERSION"))
        else:
            _current_gateway = FakeGateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None


def get_currency() -> str:
    """Currency used for payment intents, lower-case ISO 4217."""
    return os.getenv("STOREFRONT_CURRENCY", DEFAULT_CURRENCY).lower()
