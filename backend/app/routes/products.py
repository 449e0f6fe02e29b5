"""
Product Catalog Backend — Product Route Handlers
==================================================

What:  CRUD endpoints for the product resource under /api/products.
Why:   The HTTP face of ProductStore.
How:   Each handler extracts request data, runs the validator where a body is
       involved, calls the store, and returns the result with the right
       status code. Failures are raised as typed exceptions and turned into
       `{"error": ...}` responses by the global handlers in main.py.

Route Inventory:
    GET    /api/products          list (category filter + pagination)
    GET    /api/products/{id}     get one
    POST   /api/products          create          → 201
    PUT    /api/products/{id}     replace fields  → 200
    DELETE /api/products/{id}     delete          → 204
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from app.dependencies import get_product_store
from app.schemas.product import ErrorResponse, Product, ProductPage
from app.services.product_store import ProductStore
from app.services.validator import validate_product

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


def parse_positive_int(raw: Optional[str]) -> Optional[int]:
    """
    Parse a pagination query parameter.

    Returns None (meaning "use the default") for anything that is not a
    base-10 integer >= 1, so bad input never turns into an error or a
    nonsensical slice.
    """
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value >= 1 else None


@router.get(
    "/products",
    response_model=ProductPage,
    summary="List products",
    description=(
        "Returns products in insertion order, optionally filtered by category "
        "(case-insensitive) and paginated. `total` counts all matches before "
        "pagination. Invalid `page`/`limit` values fall back to their defaults."
    ),
)
async def list_products(
    category: Optional[str] = Query(default=None, description="Exact category, any case"),
    page: Optional[str] = Query(default=None, description="1-based page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Page size (default from DEFAULT_PAGE_LIMIT)"),
    store: ProductStore = Depends(get_product_store),
) -> ProductPage:
    return store.list(
        category=category,
        page=parse_positive_int(page),
        limit=parse_positive_int(limit),
    )


@router.get(
    "/products/{product_id}",
    response_model=Product,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Get a single product by ID",
)
async def get_product(
    product_id: str,
    store: ProductStore = Depends(get_product_store),
) -> Product:
    return store.get(product_id)


@router.post(
    "/products",
    status_code=201,
    response_model=Product,
    responses={400: {"description": "Invalid product payload", "model": ErrorResponse}},
    summary="Create a product",
    description=(
        "Requires non-empty name, description and category, a positive numeric "
        "price and a boolean inStock. Extra fields are stored as given; any `id` "
        "in the body is ignored."
    ),
)
async def create_product(
    payload: Any = Body(default=None),
    store: ProductStore = Depends(get_product_store),
) -> Product:
    draft = validate_product(payload)
    return store.create(draft)


@router.put(
    "/products/{product_id}",
    response_model=Product,
    responses={
        400: {"description": "Invalid product payload", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Replace a product's fields",
    description=(
        "Validated like create. Overwrites every core field, merges extra "
        "fields, and keeps the product's id and position in the listing."
    ),
)
async def update_product(
    product_id: str,
    payload: Any = Body(default=None),
    store: ProductStore = Depends(get_product_store),
) -> Product:
    # Validation runs before the lookup: a bad body is a 400 even for unknown ids
    draft = validate_product(payload)
    return store.update(product_id, draft)


@router.delete(
    "/products/{product_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    store: ProductStore = Depends(get_product_store),
) -> Response:
    store.delete(product_id)
    return Response(status_code=204)
