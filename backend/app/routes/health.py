"""
Product Catalog Backend — Health Check and Welcome Routes
===========================================================

What:  GET /health for probes, GET / for a plain-text greeting.
Why:   Load balancers and container runtimes need a cheap liveness check.
How:   The service has no external dependencies, so it is healthy whenever
       it can answer. The store size is reported for quick sanity checks.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app import __version__
from app.config import settings
from app.dependencies import get_product_store
from app.schemas.product import HealthResponse
from app.services.product_store import ProductStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Welcome message")
async def welcome() -> str:
    return "Hello WELCOME!"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: ProductStore = Depends(get_product_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.app_env,
        products=len(store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
