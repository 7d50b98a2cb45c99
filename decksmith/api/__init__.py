from decksmith.api.deck import router as deck_router
from decksmith.api.health import router as health_router
from decksmith.api.session import router as session_router

__all__ = [
    "deck_router",
    "health_router",
    "session_router",
]
