"""
Product Catalog Backend — Product Payload Validator
=====================================================

What:  Checks a loosely-typed request body against the product field rules
       and turns it into a typed ProductDraft.
Why:   Create and update accept raw JSON so that the client gets one of three
       fixed error messages, in a fixed order, instead of FastAPI's generic
       422 field report.
How:   Three ordered checks, stopping at the first failure:
           1. presence  → MissingFieldsError
           2. price     → InvalidPriceError
           3. inStock   → InvalidInStockTypeError
       Only after all checks pass is the payload parsed into ProductDraft.
Who:   Called by the create and update routes before touching the store.

This module is pure: no logging, no configuration, no side effects.
"""

import math
import sys
from typing import Any, Dict, Mapping

from app.exceptions import InvalidInStockTypeError, InvalidPriceError, MissingFieldsError
from app.schemas.product import CORE_FIELDS, ProductDraft

REQUIRED_TEXT_FIELDS = ("name", "description", "category")

# The identifier is owned by the store, never copied from a payload
_RESERVED_KEYS = {"id"}


def _is_number(value: Any) -> bool:
    # bool is a subclass of int but is not a price
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_present_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_present_price(value: Any) -> bool:
    """Price counts as present unless it is null, false, zero, empty or NaN."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, float):
        return value != 0 and not math.isnan(value)
    if _is_number(value):
        return value != 0
    return True


def _is_valid_price(value: Any) -> bool:
    """A number > 0 that a JSON client can read back as a finite float."""
    if not _is_number(value) or value <= 0:
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    # int/float comparison is exact in Python and never overflows
    return value <= sys.float_info.max


def validate_product(payload: Any) -> ProductDraft:
    """
    Validate a product payload and return the typed draft.

    Args:
        payload: Decoded JSON body. Anything other than a JSON object is
                 treated as a payload with every field missing.

    Returns:
        ProductDraft holding the five core fields plus any extra fields.
        An `id` key in the payload is dropped.

    Raises:
        MissingFieldsError:       name/description/category empty or absent,
                                  or price null/zero/empty
        InvalidPriceError:        price not numeric, not > 0, or not finite
        InvalidInStockTypeError:  inStock absent or not a boolean
    """
    if not isinstance(payload, Mapping):
        raise MissingFieldsError(missing=list(CORE_FIELDS[:4]))

    # ── Check 1: presence ─────────────────────────────────────────────────
    missing = [f for f in REQUIRED_TEXT_FIELDS if not _is_present_text(payload.get(f))]
    price = payload.get("price")
    if not _is_present_price(price):
        missing.append("price")
    if missing:
        raise MissingFieldsError(missing=sorted(missing, key=CORE_FIELDS.index))

    # ── Check 2: price type, sign and range ───────────────────────────────
    if not _is_valid_price(price):
        raise InvalidPriceError(price)

    # ── Check 3: inStock presence and type ────────────────────────────────
    if "inStock" not in payload or not isinstance(payload["inStock"], bool):
        raise InvalidInStockTypeError(payload.get("inStock"))

    extras: Dict[str, Any] = {
        key: value
        for key, value in payload.items()
        if key not in CORE_FIELDS and key not in _RESERVED_KEYS
    }
    return ProductDraft(
        name=payload["name"],
        description=payload["description"],
        price=price,
        category=payload["category"],
        inStock=payload["inStock"],
        **extras,
    )
