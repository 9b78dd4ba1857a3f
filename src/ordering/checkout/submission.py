"""Order Builder: cart snapshot + customer details → order submission.

Pure transformation, no I/O. The total comes from ``total_amount`` so it
always matches what the cart page showed.
"""

from dataclasses import dataclass

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from ordering.cart.codec import encode_line_item
from ordering.cart.line_item import CartLineItem, total_amount
from ordering.checkout.errors import EmptyCartError
from ordering.domain import ordering

CUSTOMER_FIELDS = ("name", "email", "address", "city", "postal_code")

_ALIASES = {"postalCode": "postal_code"}


@ordering.value_object
class CustomerInfo:
    """Who is buying and where the order goes. Every field is required."""

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)

    @invariant.post
    def fields_must_not_be_blank(self):
        blank = {name: [f"{name} is required"] for name in CUSTOMER_FIELDS if not (getattr(self, name) or "").strip()}
        if blank:
            raise ValidationError(blank)

    def to_payload(self):
        return {
            "name": self.name,
            "email": self.email,
            "address": self.address,
            "city": self.city,
            "postalCode": self.postal_code,
        }


@dataclass(frozen=True)
class OrderSubmission:
    items: tuple[CartLineItem, ...]
    total_amount: int
    customer_info: CustomerInfo

    def to_payload(self):
        """Request body of the payment-intent endpoint."""
        return {
            "items": [encode_line_item(item) for item in self.items],
            "totalAmount": self.total_amount,
            "customerInfo": self.customer_info.to_payload(),
        }


def customer_info_from(data) -> CustomerInfo:
    """Build ``CustomerInfo`` from a mapping, reporting every blank field at once."""
    if isinstance(data, CustomerInfo):
        return data

    values = {_ALIASES.get(key, key): value for key, value in (data or {}).items()}
    cleaned = {}
    errors = {}
    for name in CUSTOMER_FIELDS:
        value = values.get(name)
        value = value.strip() if isinstance(value, str) else value
        if not value:
            errors[name] = [f"{name} is required"]
        else:
            cleaned[name] = value
    if errors:
        raise ValidationError(errors)
    return CustomerInfo(**cleaned)


def build_submission(items, customer_info) -> OrderSubmission:
    """Compose the order submission.

    Raises ``EmptyCartError`` for an empty snapshot and ``ValidationError``
    keyed by field name for missing customer details.
    """
    items = tuple(items)
    if not items:
        raise EmptyCartError()

    info = customer_info_from(customer_info)
    return OrderSubmission(items=items, total_amount=total_amount(items), customer_info=info)
