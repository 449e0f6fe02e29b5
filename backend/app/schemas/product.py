"""
Product Catalog Backend — Pydantic Request/Response Schemas
=============================================================

What:  Pydantic models defining the API contract for the product resource.
Why:   Typed core fields, automatic serialization, and OpenAPI doc generation.
How:   FastAPI serializes these models on every response. Request bodies are
       NOT bound to these models directly: they arrive as loose JSON and go
       through `validate_product()` first, which enforces the ordered checks
       and then builds a `ProductDraft`.

Extra fields:
    Callers may send fields beyond the five core ones. They are kept in the
    model's extra map (`model_extra`), separate from the typed core fields,
    and are echoed back in responses.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt


# JSON keys of the typed core fields, in the order clients see them
CORE_FIELDS = ("name", "description", "price", "category", "inStock")


# ══════════════════════════════════════════════════════════════════════════
# Product Models
# ══════════════════════════════════════════════════════════════════════════


class ProductDraft(BaseModel):
    """
    What:  A validated product payload, not yet stored (no id).
    Who:   Produced by validate_product(); consumed by ProductStore.create/update.

    Field names match the JSON keys exactly (hence `inStock`), so every other
    key in a payload, `in_stock` included, lands in the extra map without
    colliding with a typed field.

    `price` keeps the caller's numeric type: 5 stays 5, 5.5 stays 5.5.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(description="Product name (non-empty)")
    description: str = Field(description="Product description (non-empty)")
    price: Union[StrictInt, float] = Field(description="Unit price, strictly positive and finite")
    category: str = Field(description="Category label; filtering ignores case")
    inStock: bool = Field(description="Availability flag")

    @property
    def extra_fields(self) -> Dict[str, Any]:
        """Caller-supplied fields outside the typed core."""
        return dict(self.model_extra or {})

    def core_fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "inStock": self.inStock,
        }


class Product(ProductDraft):
    """
    What:  A stored product: a draft plus the store-assigned identifier.
    Who:   Returned by every product endpoint that yields a single product.
    """

    id: str = Field(description="Store-assigned identifier (UUID4 string)")


class ProductPage(BaseModel):
    """
    What:  One page of the (optionally filtered) product listing.
    Who:   Returned by GET /api/products.

    `total` counts the filtered sequence before pagination, so a client can
    compute the number of pages as ceil(total / limit).
    """

    total: int = Field(description="Number of products matching the filter")
    page: int = Field(description="1-based page number that was served")
    limit: int = Field(description="Page size that was applied")
    data: List[Product] = Field(description="Products on this page, in insertion order")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by every failing endpoint.

    Example:
        {"error": "Price must be a positive number"}

    `stack` is only present on 500 responses when APP_ENV=development.
    """

    error: str = Field(description="Human-readable error message")
    stack: Optional[str] = Field(default=None, description="Traceback (development only)")


class HealthResponse(BaseModel):
    """Health check response for monitoring and load balancer probes."""

    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    environment: str = Field(description="Configured APP_ENV")
    products: int = Field(description="Number of products currently stored")
    uptime_seconds: float = Field(description="Seconds since service started")
