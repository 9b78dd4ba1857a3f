"""Product aggregate root.

Prices are non-negative integers in the smallest currency unit (yen has no
minor unit, so 1500 means ¥1,500). Stock is a plain non-negative count; the
catalogue does not reserve or decrement it.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.product.events import ProductAdded


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    title: String(required=True, max_length=255)
    description: Text()
    price: Integer(required=True, min_value=0)
    image_url: String(max_length=500)
    category: String(max_length=100)
    stock: Integer(min_value=0, default=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def title_must_not_be_blank(self):
        if self.title is not None and not self.title.strip():
            raise ValidationError({"title": ["Product title cannot be blank"]})

    @classmethod
    def create(cls, title, price, description=None, image_url=None, category=None, stock=0):
        now = datetime.now(UTC)

        product = cls(
            title=title,
            description=description,
            price=price,
            image_url=image_url,
            category=category,
            stock=stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                title=title,
                category=category,
                price=price,
                stock=stock,
                created_at=now,
            )
        )
        return product

    @property
    def in_stock(self):
        return bool(self.stock)

    def to_payload(self):
        """Wire representation shared by the API and cart snapshots."""
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description or "",
            "price": self.price,
            "imageUrl": self.image_url or "",
            "category": self.category or "",
            "stock": self.stock or 0,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
