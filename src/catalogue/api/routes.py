"""FastAPI endpoints for the Catalogue domain."""

import os

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from catalogue.api.schemas import AddProductRequest, ProductIdResponse, ProductResponse, SeedResponse
from catalogue.domain import logger
from catalogue.product.catalog import get_all_products, get_product_by_id
from catalogue.product.creation import AddProduct
from catalogue.product.seed import seed_products

product_router = APIRouter(prefix="/products", tags=["products"])


def _to_response(product) -> ProductResponse:
    return ProductResponse.model_validate(product.to_payload())


@product_router.get("", response_model=list[ProductResponse])
async def list_products():
    try:
        products = get_all_products()
    except Exception:
        logger.exception("product_listing_failed")
        return JSONResponse(status_code=503, content={"error": "Products could not be loaded"})
    return [_to_response(product) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = get_product_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _to_response(product)


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        title=body.title,
        description=body.description,
        price=body.price,
        image_url=body.image_url,
        category=body.category,
        stock=body.stock,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.post("/seed", status_code=201, response_model=SeedResponse)
async def seed_catalogue() -> SeedResponse:
    """Load the sample catalogue (non-production only).

    Not idempotent: existing products are left alone and the samples are
    added again.
    """
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Seeding not available in production")

    return SeedResponse(product_ids=seed_products())
