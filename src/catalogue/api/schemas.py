"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# --- Request Schemas ---


class AddProductRequest(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Wireless Earbuds",
                    "description": "High-fidelity wireless earbuds.",
                    "price": 15000,
                    "imageUrl": "https://images.example.com/earbuds.jpg",
                    "category": "Audio",
                    "stock": 50,
                }
            ]
        },
    }

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: int = Field(..., ge=0)
    image_url: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=100)
    stock: int = Field(0, ge=0)


# --- Response Schemas ---


class ProductResponse(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    id: str
    title: str
    description: str = ""
    price: int
    image_url: str = ""
    category: str = ""
    stock: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-abc123"}]}}

    product_id: str


class SeedResponse(BaseModel):
    product_ids: list[str]
