"""
Product Catalog Backend — Request Dependencies
================================================

What:  FastAPI dependency that hands each request the application's store.
Why:   The store is owned by the application object (created in create_app,
       kept on `app.state`), not by a module global. Routes receive it by
       injection, and tests swap it with `app.dependency_overrides`.

Example usage in a route:
    @router.get("/products")
    async def list_products(store: ProductStore = Depends(get_product_store)):
        return store.list()
"""

from fastapi import Request

from app.services.product_store import ProductStore


def get_product_store(request: Request) -> ProductStore:
    """Return the ProductStore attached to the running application."""
    return request.app.state.product_store
