"""Faker-based data generators for Locust load test scenarios.

Payloads match the camelCase field names expected by the API's Pydantic
request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def valid_email() -> str:
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:4]}@{domain}"


def customer_info() -> dict:
    """Customer details with every required field filled in."""
    return {
        "name": fake.name(),
        "email": valid_email(),
        "address": fake.street_address(),
        "city": fake.city(),
        "postalCode": fake.postcode(),
    }


def product_data() -> dict:
    return {
        "title": f"{fake.word().title()} {fake.word().title()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(),
        "price": random.choice([500, 1200, 2000, 4800, 9800, 15000]),
        "imageUrl": fake.image_url(),
        "category": random.choice(["Audio", "Wearables", "Cables", "Batteries"]),
        "stock": random.randint(10, 200),
    }


def cart_item_data(product_id: str, stock: int) -> dict:
    return {"productId": product_id, "quantity": random.randint(1, max(1, min(3, stock)))}


def payment_confirmation(success_rate: float = 0.9) -> dict:
    if random.random() < success_rate:
        return {"succeeded": True}
    return {"succeeded": False, "message": "Your card was declined."}
