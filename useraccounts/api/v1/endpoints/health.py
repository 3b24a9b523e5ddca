"""Health check endpoint. No auth; used for liveness checks."""

from fastapi import APIRouter, Request

from useraccounts.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok plus whether the cache is connected."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        state = "disabled"
    elif cache.is_available():
        state = "connected"
    else:
        state = "unavailable"
    return HealthResponse(cache=state)
