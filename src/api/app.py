"""
FastAPI application factory.

* Registers routes for eligibility, distance, flight lookup and admin.
* Opens / closes the shared outbound HTTP client via lifespan events.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

import httpx
from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import admin, distance, eligibility, flights
from src.config import settings

logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the outbound HTTP client on startup; close it on shutdown."""
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.aviation_stack_timeout_seconds
    )
    yield
    await app.state.http_client.aclose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Flight Compensation Eligibility API",
        description=(
            "Decides whether a delayed, cancelled or overbooked flight "
            "qualifies for EU261 / UK261 compensation and computes the "
            "amount owed."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(eligibility.router, prefix="/api/v1")
    app.include_router(distance.router, prefix="/api/v1")
    app.include_router(flights.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
