"""
Product Catalog Backend — Product Store
=========================================

What:  Owns the authoritative, ordered, in-memory collection of products.
Why:   Keeps identity and ordering rules in one place, independent of HTTP.
How:   A list of Product models guarded by a single lock. Every public
       operation takes the lock for its whole duration, so no two operations
       ever interleave, whether handlers run on the event loop or in
       FastAPI's threadpool.
Who:   Created by the app factory (one instance per application), injected
       into routes via `get_product_store`.
When:  Lives from application startup to shutdown; nothing is persisted.

Identity rules:
    - ids are UUID4 strings generated here, never taken from a payload
    - update re-asserts the original id after applying the draft
    - deleted ids are not reused (UUID4 makes reuse practically impossible)

Ordering rules:
    - create appends; update replaces in place; delete removes
    - listing returns insertion order, no sorting
"""

import logging
import threading
import uuid
from typing import Iterable, List, Optional

from app.exceptions import NotFoundError
from app.schemas.product import Product, ProductDraft, ProductPage

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 10

SEED_PRODUCT = {
    "name": "Laptop",
    "description": "High-performance laptop",
    "price": 999.99,
    "category": "Electronics",
    "inStock": True,
}


def _positive_or(value: Optional[int], default: int) -> int:
    if value is None or value < 1:
        return default
    return value


class ProductStore:
    """
    In-memory product collection with list/get/create/update/delete.

    Returned products are copies: mutating a returned model never changes
    the stored one.
    """

    def __init__(
        self,
        products: Optional[Iterable[Product]] = None,
        default_page_limit: int = DEFAULT_PAGE_LIMIT,
    ):
        self._lock = threading.Lock()
        self._products: List[Product] = [p.model_copy(deep=True) for p in products or []]
        self.default_page_limit = _positive_or(default_page_limit, DEFAULT_PAGE_LIMIT)

    @classmethod
    def seeded(cls, default_page_limit: int = DEFAULT_PAGE_LIMIT) -> "ProductStore":
        """Create a store holding the single startup product."""
        store = cls(default_page_limit=default_page_limit)
        store.create(ProductDraft(**SEED_PRODUCT))
        return store

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: str) -> int:
        # Caller must hold the lock
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise NotFoundError(resource="Product", resource_id=product_id)

    # ── Reads ─────────────────────────────────────────────────────────────

    def list(
        self,
        category: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ProductPage:
        """
        Filter by category, then return one page of the result.

        Args:
            category: Case-insensitive exact match on the product category.
                      None or empty string disables the filter.
            page:     1-based page number; missing or < 1 means 1.
            limit:    Page size; missing or < 1 means the store default.

        Returns:
            ProductPage with `total` counted after filtering and before
            slicing. A page past the end has empty `data`.
        """
        page = _positive_or(page, 1)
        limit = _positive_or(limit, self.default_page_limit)

        with self._lock:
            matched = self._products
            if category:
                wanted = category.lower()
                matched = [p for p in matched if p.category.lower() == wanted]

            start_index = (page - 1) * limit
            end_index = page * limit
            window = [p.model_copy(deep=True) for p in matched[start_index:end_index]]
            total = len(matched)

        return ProductPage(total=total, page=page, limit=limit, data=window)

    def get(self, product_id: str) -> Product:
        """
        Return the product with the given id.

        Raises:
            NotFoundError: No product has this id.
        """
        with self._lock:
            return self._products[self._index_of(product_id)].model_copy(deep=True)

    # ── Mutations ─────────────────────────────────────────────────────────

    def create(self, draft: ProductDraft) -> Product:
        """Assign a fresh id to a validated draft and append it."""
        fields = draft.model_dump()
        fields["id"] = str(uuid.uuid4())
        product = Product(**fields)

        with self._lock:
            self._products.append(product)
            logger.info("Product created: %s (%s)", product.id, product.name)
            return product.model_copy(deep=True)

    def update(self, product_id: str, draft: ProductDraft) -> Product:
        """
        Replace the fields of an existing product, keeping its id and position.

        Core fields are overwritten one by one from the draft. Extra fields
        are merged: existing extras first, then the draft's, so a key present
        in both takes the draft's value and keys absent from the draft survive.

        Raises:
            NotFoundError: No product has this id.
        """
        with self._lock:
            index = self._index_of(product_id)
            existing = self._products[index]

            fields = existing.extra_fields
            fields.update(draft.extra_fields)
            fields.update(draft.core_fields())
            fields["id"] = existing.id

            updated = Product(**fields)
            self._products[index] = updated
            logger.info("Product updated: %s", updated.id)
            return updated.model_copy(deep=True)

    def delete(self, product_id: str) -> None:
        """
        Remove a product.

        Raises:
            NotFoundError: No product has this id.
        """
        with self._lock:
            index = self._index_of(product_id)
            del self._products[index]
            logger.info("Product deleted: %s", product_id)

    def clear(self) -> None:
        with self._lock:
            self._products.clear()
