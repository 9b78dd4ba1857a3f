"""Read access to the catalogue from the ordering context.

Ordering never writes products. It only needs a snapshot of one product when
the shopper adds it to the cart, so the reader returns ``ProductSnapshot``
values rather than catalogue aggregates.
"""

import structlog

from ordering.cart.line_item import ProductSnapshot

logger = structlog.get_logger(__name__)


class CatalogueReader:
    """Looks products up in the catalogue domain."""

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        from catalogue.domain import catalogue
        from catalogue.product.catalog import get_product_by_id

        with catalogue.domain_context():
            product = get_product_by_id(product_id)
            if product is None:
                return None
            payload = product.to_payload()

        return ProductSnapshot.from_payload(payload)


class StaticCatalogue:
    """Fixed set of product payloads keyed by id, for tests and demos."""

    def __init__(self, products=None) -> None:
        self.products = {str(p["id"]): p for p in products or []}

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        payload = self.products.get(str(product_id))
        return ProductSnapshot.from_payload(payload) if payload else None


_current_reader = None


def get_catalog_reader():
    global _current_reader
    if _current_reader is None:
        _current_reader = CatalogueReader()
    return _current_reader


def set_catalog_reader(reader) -> None:
    """Override the catalogue reader (useful for tests)."""
    global _current_reader
    _current_reader = reader


def reset_catalog_reader() -> None:
    global _current_reader
    _current_reader = None
