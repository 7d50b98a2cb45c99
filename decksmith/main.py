import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from decksmith.api import deck_router, health_router, session_router
from decksmith.config import settings
from decksmith.db.database import create_local_engine, create_session_factory, init_db
from decksmith.services.card_directory import load_card_directory
from decksmith.services.composition import DeckSession
from decksmith.services.persistence import PersistenceBridge, SqlLocalStore
from decksmith.services.remote_decks import RemoteDeckClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the catalog and wire the deck session to the local store."""
    directory = load_card_directory(settings.catalog_path)

    engine = create_local_engine()
    init_db(engine)

    session = DeckSession(directory)
    bridge = PersistenceBridge(
        session,
        SqlLocalStore(create_session_factory(engine)),
        remote=RemoteDeckClient(),
    )
    bridge.attach()
    if bridge.restore_pending():
        logger.info("Restored pending local deck %r", session.name)

    app.state.deck_session = session
    app.state.bridge = bridge
    yield
    bridge.detach()
    engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("decksmith"),
    lifespan=lifespan,
)

app.include_router(deck_router)
app.include_router(health_router)
app.include_router(session_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
