"""
Session endpoints.

The display layer reports sign-in and sign-out here so the persistence
bridge can migrate the local deck on sign-in.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from decksmith.api.deck import DeckResponse, deck_response
from decksmith.services.persistence import PersistenceBridge

router = APIRouter(prefix="/session", tags=["session"])


def get_bridge(request: Request) -> PersistenceBridge:
    """Dependency that provides the persistence bridge owned by the app."""
    bridge: PersistenceBridge = request.app.state.bridge
    return bridge


class SessionRequest(BaseModel):
    user_id: str | None = None


class SessionResponse(BaseModel):
    user_id: str | None
    restored: bool
    deck: DeckResponse


@router.put("", response_model=SessionResponse)
async def set_session(
    body: SessionRequest,
    bridge: Annotated[PersistenceBridge, Depends(get_bridge)],
) -> SessionResponse:
    """
    Record the signed-in user (null when signed out).

    On sign-in, a pending local deck (or, failing that, the user's
    remote deck) becomes the deck being edited.
    """
    adopted = await bridge.on_auth_change(body.user_id)
    return SessionResponse(
        user_id=bridge.user_id,
        restored=adopted is not None,
        deck=deck_response(bridge.session.snapshot()),
    )
