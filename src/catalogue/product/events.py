"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    title: String(required=True)
    category: String()
    price: Integer(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)
