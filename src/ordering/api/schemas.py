"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from the
internal value objects. Field names are camelCase on the wire, matching the
snapshots the storefront keeps in storage.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ProductSnapshotSchema(BaseModel):
    model_config = _CAMEL

    id: str
    title: str
    description: str = ""
    price: int = Field(ge=0)
    image_url: str = ""
    category: str = ""
    stock: int = Field(0, ge=0)
    created_at: str | None = None
    updated_at: str | None = None


class LineItemSchema(BaseModel):
    model_config = _CAMEL

    product_id: str
    product: ProductSnapshotSchema
    quantity: int = Field(ge=1)


class CustomerInfoSchema(BaseModel):
    """Blank values are accepted here and rejected by the domain with per-field errors."""

    model_config = {
        **_CAMEL,
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Hanako Yamada",
                    "email": "hanako@example.com",
                    "address": "1-2-3 Shibuya",
                    "city": "Tokyo",
                    "postalCode": "150-0002",
                }
            ]
        },
    }

    name: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    model_config = {
        **_CAMEL,
        "json_schema_extra": {"examples": [{"productId": "prod-abc123", "quantity": 2}]},
    }

    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    """A quantity of zero or less removes the line."""

    quantity: int


class CartResponse(BaseModel):
    model_config = _CAMEL

    items: list[LineItemSchema]
    total_amount: int
    item_count: int


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    model_config = _CAMEL

    customer_info: CustomerInfoSchema


class CheckoutResponse(BaseModel):
    model_config = _CAMEL

    order_id: str
    client_secret: str
    payment_intent_id: str | None = None
    total_amount: int


class ConfirmPaymentRequest(BaseModel):
    model_config = {
        **_CAMEL,
        "json_schema_extra": {"examples": [{"succeeded": False, "message": "Your card was declined."}]},
    }

    succeeded: bool
    message: str | None = None


class OrderSummaryResponse(BaseModel):
    """What the order-success page shows."""

    model_config = _CAMEL

    order_id: str
    items: list[LineItemSchema]
    total_amount: int
    status: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class StatusSchema(BaseModel):
    model_config = _CAMEL

    value: str | None
    label: str
    colour: str


class OrderHistoryEntryResponse(BaseModel):
    model_config = _CAMEL

    id: str
    items: list[LineItemSchema]
    total_amount: int
    status: StatusSchema
    created_at: str | None = None
    updated_at: str | None = None


class OrderResponse(BaseModel):
    model_config = _CAMEL

    id: str
    user_id: str
    items: list[LineItemSchema]
    total_amount: int
    status: StatusSchema
    stripe_payment_intent_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


# ---------------------------------------------------------------------------
# Payment intent endpoint
# ---------------------------------------------------------------------------
class PaymentIntentRequest(BaseModel):
    model_config = _CAMEL

    items: list[LineItemSchema]
    total_amount: int = Field(ge=0)
    customer_info: CustomerInfoSchema


class PaymentIntentResponse(BaseModel):
    model_config = _CAMEL

    client_secret: str
    order_id: str
