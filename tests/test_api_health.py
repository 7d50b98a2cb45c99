"""Tests for health check endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from decksmith.main import app
from decksmith.services.card_directory import CardDirectory
from decksmith.services.composition import DeckSession


@pytest.fixture
async def client():
    """Provide an async test client (lifespan not run)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_health_reports_catalog_size(
        self, client: AsyncClient, directory: CardDirectory
    ) -> None:
        """Catalog size is reported once a deck session is loaded."""
        app.state.deck_session = DeckSession(directory)
        try:
            response = await client.get("/health")
        finally:
            del app.state.deck_session

        assert response.json() == {"status": "healthy", "cards": len(directory)}
