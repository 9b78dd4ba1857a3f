"""Order aggregate — the server-side record of a checkout attempt.

An order is created ``pending`` from the cart snapshot before the payment
processor is contacted, so the processor can reference it by id. The total is
taken from the submission as-is.

State Machine:
    PENDING → PAID → SHIPPED → DELIVERED
    PENDING → CANCELLED (checkout could not open a payment intent)
    PAID → CANCELLED

Only creation, payment-intent attachment and cancellation have mutators here;
the later statuses are set by back-office tooling outside this service.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderCreated, PaymentIntentAttached

ANONYMOUS_USER = "anonymous"


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


@ordering.entity(part_of="Order")
class OrderItem:
    """A line of the order: the product as it was in the cart, and a quantity."""

    product_id = String(required=True, max_length=255)
    title = String(required=True, max_length=255)
    description = Text()
    unit_price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    image_url = String(max_length=500)
    category = String(max_length=100)
    stock = Integer(min_value=0, default=0)
    product_created_at = String(max_length=50)
    product_updated_at = String(max_length=50)

    def to_line_item_payload(self):
        """Same shape as a persisted cart line item."""
        return {
            "productId": self.product_id,
            "product": {
                "id": self.product_id,
                "title": self.title,
                "description": self.description or "",
                "price": self.unit_price,
                "imageUrl": self.image_url or "",
                "category": self.category or "",
                "stock": self.stock or 0,
                "createdAt": self.product_created_at,
                "updatedAt": self.product_updated_at,
            },
            "quantity": self.quantity,
        }


@ordering.aggregate
class Order:
    user_id = String(required=True, max_length=255, default=ANONYMOUS_USER)
    items = HasMany(OrderItem)
    total_amount = Integer(required=True, min_value=0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    stripe_payment_intent_id = String(max_length=255)
    cancellation_reason = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, items_data, total_amount, user_id=ANONYMOUS_USER):
        """Create a pending order.

        Args:
            items_data: List of cart line item dicts
                (``{"productId", "product": {...}, "quantity"}``).
            total_amount: Order total in the smallest currency unit.
            user_id: Owner of the order; always the anonymous user today.
        """
        if not items_data:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)

        order = cls(
            user_id=user_id or ANONYMOUS_USER,
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for entry in items_data:
            order.add_items(_item_from_payload(entry))
        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                user_id=order.user_id,
                items=json.dumps(items_data, ensure_ascii=False),
                total_amount=total_amount,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def attach_payment_intent(self, payment_intent_id):
        """Remember the processor's payment intent. Only pending orders accept one."""
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise ValidationError({"status": ["A payment intent can only be attached to a pending order"]})

        now = datetime.now(UTC)
        self.stripe_payment_intent_id = payment_intent_id
        self.updated_at = now

        self.raise_(
            PaymentIntentAttached(
                order_id=str(self.id),
                payment_intent_id=payment_intent_id,
                attached_at=now,
            )
        )

    def cancel(self, reason):
        self._assert_can_transition(OrderStatus.CANCELLED)

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                reason=reason,
                cancelled_at=now,
            )
        )

    def to_payload(self):
        """camelCase representation, matching what the storefront keeps in history."""
        return {
            "id": str(self.id),
            "userId": self.user_id,
            "items": [item.to_line_item_payload() for item in self.items],
            "totalAmount": self.total_amount,
            "status": self.status,
            "stripePaymentIntentId": self.stripe_payment_intent_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


def _item_from_payload(entry):
    product = entry["product"]
    return OrderItem(
        product_id=str(entry.get("productId") or product["id"]),
        title=product["title"],
        description=product.get("description") or None,
        unit_price=product["price"],
        quantity=entry["quantity"],
        image_url=product.get("imageUrl") or None,
        category=product.get("category") or None,
        stock=product.get("stock") or 0,
        product_created_at=product.get("createdAt"),
        product_updated_at=product.get("updatedAt"),
    )
