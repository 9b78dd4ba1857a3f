"""Sample catalogue data for development and demos.

Seeding is not idempotent: running it twice adds every product twice.
"""

from protean.utils.globals import current_domain

from catalogue.domain import logger
from catalogue.product.creation import AddProduct

SAMPLE_PRODUCTS = [
    {
        "title": "Wireless Earbuds",
        "description": "High-fidelity wireless earbuds, comfortable for all-day listening.",
        "price": 15000,
        "image_url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400",
        "category": "Audio",
        "stock": 50,
    },
    {
        "title": "Smartwatch",
        "description": "Health tracking and phone notifications on your wrist.",
        "price": 25000,
        "image_url": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400",
        "category": "Wearables",
        "stock": 30,
    },
    {
        "title": "Bluetooth Speaker",
        "description": "Compact, portable Bluetooth speaker.",
        "price": 8000,
        "image_url": "https://images.unsplash.com/photo-1608043152269-423dbba4e7e1?w=400",
        "category": "Audio",
        "stock": 25,
    },
    {
        "title": "Wireless Mouse",
        "description": "Ergonomic wireless mouse.",
        "price": 5000,
        "image_url": "https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?w=400",
        "category": "PC Accessories",
        "stock": 100,
    },
    {
        "title": "USB-C Cable",
        "description": "Fast-charging USB-C cable, 1m.",
        "price": 2000,
        "image_url": "https://images.unsplash.com/photo-1583394838336-acd977736f90?w=400",
        "category": "Cables",
        "stock": 200,
    },
    {
        "title": "Power Bank",
        "description": "High-capacity 10000mAh power bank.",
        "price": 6000,
        "image_url": "https://images.unsplash.com/photo-1609592807900-0b8b0a4a0b8b?w=400",
        "category": "Batteries",
        "stock": 40,
    },
]


def seed_products(products=None):
    """Add sample products to the catalogue and return their ids."""
    product_ids = []
    for data in products or SAMPLE_PRODUCTS:
        product_id = current_domain.process(AddProduct(**data), asynchronous=False)
        logger.info("sample_product_added", product_id=product_id, title=data["title"])
        product_ids.append(product_id)
    return product_ids
