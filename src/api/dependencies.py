"""FastAPI dependency injection helpers."""

from fastapi import Request

from src.config import settings
from src.infrastructure.aviation import AviationStackClient


def get_aviation_client(request: Request) -> AviationStackClient:
    """Build a lookup client around the app-wide HTTP connection pool."""
    return AviationStackClient(
        request.app.state.http_client,
        base_url=settings.aviation_stack_url,
        access_key=settings.aviation_stack_key,
        status_filter=settings.flight_status_filter,
    )
