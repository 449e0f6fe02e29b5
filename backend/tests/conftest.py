"""
Product Catalog Backend — Test Configuration (conftest.py)
============================================================

Shared pytest fixtures for the whole suite.

Function-scoped (created fresh for each test):
    ├── store:           Seeded ProductStore (one Laptop), page size 10
    ├── product_payload: A valid create/update body
    ├── catalog_app:     FastAPI app owning its own seeded store
    └── test_client:     HTTPX AsyncClient wired to `catalog_app` via ASGITransport
"""

import os

# Set before any app import so the settings singleton picks them up
os.environ.setdefault("APP_ENV", "production")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DEFAULT_PAGE_LIMIT", "10")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import create_app
from app.services.product_store import ProductStore


@pytest.fixture
def store():
    """A fresh store holding only the seed product."""
    return ProductStore.seeded(default_page_limit=10)


@pytest.fixture
def product_payload():
    """A body that passes validation."""
    return {
        "name": "Mouse",
        "description": "Wireless",
        "price": 19.99,
        "category": "Electronics",
        "inStock": True,
    }


@pytest.fixture
def catalog_app(store):
    """An application instance that owns the `store` fixture."""
    return create_app(store=store)


@pytest_asyncio.fixture
async def test_client(catalog_app):
    """
    Async HTTP client talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=catalog_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
