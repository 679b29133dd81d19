"""
Health check endpoint.
"""
from pydantic import BaseModel
from fastapi import APIRouter

from app.config import APP_VERSION, MAX_CONCURRENT_JOBS, ConfigurationError, get_api_key


router = APIRouter(tags=['health'])


class HealthResponse(BaseModel):
    """Health check response schema."""
    status: str
    api_key_configured: bool
    max_concurrency: int
    version: str


@router.get('/health', response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Check server health status.

    Reports whether an API key is configured without calling the API.
    """
    try:
        get_api_key()
        api_key_configured = True
    except ConfigurationError:
        api_key_configured = False

    return HealthResponse(
        status='ok',
        api_key_configured=api_key_configured,
        max_concurrency=MAX_CONCURRENT_JOBS,
        version=APP_VERSION,
    )
