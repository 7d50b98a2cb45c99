"""Tests for the session (sign-in) endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from decksmith.api.session import get_bridge
from decksmith.config import TEMPORARY_DECK_KEY
from decksmith.main import app
from decksmith.models.deck import Deck
from decksmith.services.card_directory import CardDirectory
from decksmith.services.composition import DeckSession
from decksmith.services.deck_records import serialize_deck
from decksmith.services.persistence import MemoryLocalStore, PersistenceBridge


@pytest.fixture
def store() -> MemoryLocalStore:
    return MemoryLocalStore()


@pytest.fixture
def bridge(directory: CardDirectory, store: MemoryLocalStore) -> PersistenceBridge:
    bridge = PersistenceBridge(DeckSession(directory), store)
    bridge.attach()
    return bridge


@pytest.fixture
async def client(bridge: PersistenceBridge):
    app.dependency_overrides[get_bridge] = lambda: bridge

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestSetSession:
    async def test_sign_in_adopts_local_deck(
        self, client: AsyncClient, store: MemoryLocalStore
    ) -> None:
        store.data[TEMPORARY_DECK_KEY] = serialize_deck(
            Deck(name="Pendiente", cards={"MYL-0001": 2})
        )

        response = await client.put("/session", json={"user_id": "user-1"})

        data = response.json()
        assert response.status_code == 200
        assert data["user_id"] == "user-1"
        assert data["restored"] is True
        assert data["deck"]["name"] == "Pendiente"
        assert TEMPORARY_DECK_KEY not in store.data

    async def test_sign_in_without_pending_deck(self, client: AsyncClient) -> None:
        response = await client.put("/session", json={"user_id": "user-1"})

        assert response.json()["restored"] is False
        assert response.json()["deck"]["cards"] == []

    async def test_sign_out(self, client: AsyncClient, bridge: PersistenceBridge) -> None:
        await client.put("/session", json={"user_id": "user-1"})

        response = await client.put("/session", json={"user_id": None})

        assert response.json()["user_id"] is None
        assert bridge.user_id is None


class FailingRemote:
    async def fetch_active_deck(self, user_id: str) -> Deck | None:
        raise TimeoutError("remote took too long")


class TestSessionRemoteFailure:
    async def test_sign_in_survives_remote_failure(
        self, directory: CardDirectory, store: MemoryLocalStore
    ) -> None:
        """A failing remote source still yields a normal sign-in response."""
        bridge = PersistenceBridge(DeckSession(directory), store, FailingRemote())
        app.dependency_overrides[get_bridge] = lambda: bridge
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.put("/session", json={"user_id": "user-1"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["user_id"] == "user-1"
        assert response.json()["restored"] is False
