"""
Product Catalog Backend — Custom Exception Hierarchy
======================================================

What:  Application-specific exceptions for validation and lookup failures.
Why:   Typed exceptions let the service layer report outcomes without knowing
       about HTTP, while global handlers (registered in main.py) translate
       each type to a status code and a consistent `{"error": ...}` body.
How:   Each exception carries a user-facing message and an optional context
       dict. The context is logged server-side and never returned.

Exception Hierarchy:
    CatalogError (base)                 → 500 Internal Server Error
    ├── ValidationError                 → 400 Bad Request (client can fix)
    │   ├── MissingFieldsError
    │   ├── InvalidPriceError
    │   └── InvalidInStockTypeError
    └── NotFoundError                   → 404 Not Found

Anything that is not a CatalogError is an unclassified internal failure and
is answered with a generic 500 by the catch-all handler.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """
    Raised when a product payload fails validation.

    HTTP:    400 Bad Request

    Subclasses fix the message to one of the three texts clients match on,
    so callers should raise the specific subclass rather than this class.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MissingFieldsError(ValidationError):
    """One of name, description, price or category is absent or empty."""

    def __init__(self, missing: Optional[list] = None):
        super().__init__(
            message="Missing required fields",
            context={"missing": missing or []},
        )
        self.missing = missing or []


class InvalidPriceError(ValidationError):
    """Price is not a number, or is not strictly positive."""

    def __init__(self, value: Any = None):
        super().__init__(
            message="Price must be a positive number",
            field="price",
            context={"received_type": type(value).__name__},
        )


class InvalidInStockTypeError(ValidationError):
    """inStock is absent or not a boolean."""

    def __init__(self, value: Any = None):
        super().__init__(
            message="inStock must be a boolean",
            field="inStock",
            context={"received_type": type(value).__name__},
        )


class NotFoundError(CatalogError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found

    The message is always "<Resource> not found"; the looked-up id is kept in
    the context so it appears in logs but not in the response body.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource_id = resource_id
