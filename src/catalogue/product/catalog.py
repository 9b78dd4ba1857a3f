"""Catalog reader: read-only queries over the product catalogue."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.domain import logger
from catalogue.product.product import Product


def get_all_products():
    """All products, newest first."""
    repo = current_domain.repository_for(Product)
    return repo._dao.query.order_by("-created_at").all().items


def get_product_by_id(product_id):
    """The product with ``product_id``, or None when there is no such product."""
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        logger.info("product_not_found", product_id=product_id)
        return None
