"""
Health check endpoints.

Provides a liveness probe reporting the loaded catalog size.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    cards: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running, with the number of
    catalog cards when a deck session is loaded.
    """
    session = getattr(request.app.state, "deck_session", None)
    if session is None:
        return HealthResponse(status="healthy")
    return HealthResponse(status="healthy", cards=len(session.directory))
