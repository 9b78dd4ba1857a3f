"""Cart line items and the totals derived from them.

A line item pairs a product snapshot with a quantity. The snapshot is a
denormalized copy of the catalogue entry taken when the product was added, so
a cart keeps rendering the price the shopper saw even if the catalogue changes
or the product disappears.

``total_amount`` is the single place a cart total is computed. The cart view,
the checkout page, the order builder and the success summary all go through
it.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String, Text, ValueObject

from ordering.domain import ordering


@ordering.value_object
class ProductSnapshot:
    """Immutable copy of a catalogue product, as held inside a cart."""

    product_id = String(required=True, max_length=255)
    title = String(required=True, max_length=255)
    description = Text()
    price = Integer(required=True, min_value=0)
    image_url = String(max_length=500)
    category = String(max_length=100)
    stock = Integer(min_value=0, default=0)
    created_at = String(max_length=50)  # ISO 8601
    updated_at = String(max_length=50)  # ISO 8601

    @classmethod
    def from_product(cls, product):
        """Snapshot a catalogue ``Product`` (or anything exposing its payload)."""
        return cls.from_payload(product.to_payload())

    @classmethod
    def from_payload(cls, payload):
        """Build a snapshot from the camelCase product payload."""
        return cls(
            product_id=str(payload["id"]),
            title=payload["title"],
            description=payload.get("description") or None,
            price=payload["price"],
            image_url=payload.get("imageUrl") or None,
            category=payload.get("category") or None,
            stock=payload.get("stock") or 0,
            created_at=payload.get("createdAt"),
            updated_at=payload.get("updatedAt"),
        )

    def to_payload(self):
        return {
            "id": self.product_id,
            "title": self.title,
            "description": self.description or "",
            "price": self.price,
            "imageUrl": self.image_url or "",
            "category": self.category or "",
            "stock": self.stock or 0,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@ordering.value_object
class CartLineItem:
    """One product and how many of it the shopper wants."""

    product = ValueObject(ProductSnapshot, required=True)
    quantity = Integer(required=True, min_value=1)

    @invariant.post
    def quantity_must_be_positive(self):
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

    @property
    def product_id(self):
        return self.product.product_id

    @property
    def subtotal(self):
        return self.product.price * self.quantity

    def with_quantity(self, quantity):
        """Copy of this line item carrying ``quantity`` instead."""
        return CartLineItem(product=self.product, quantity=quantity)


def total_amount(items) -> int:
    """Sum of ``price * quantity`` over ``items``."""
    return sum(item.product.price * item.quantity for item in items)


def item_count(items) -> int:
    """Total number of units across ``items``, as shown on the cart badge."""
    return sum(item.quantity for item in items)
