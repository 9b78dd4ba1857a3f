"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderCreated:
    """An order was recorded as pending, before any payment was requested."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = String(required=True)
    items = Text(required=True)  # JSON: list of line item dicts
    total_amount = Integer(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentIntentAttached:
    """The processor opened a payment intent for the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_intent_id = String(required=True)
    attached_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled before it was paid."""

    __version__ = 1

    order_id = Identifier(required=True)
    reason = String(required=True)
    cancelled_at = DateTime(required=True)
