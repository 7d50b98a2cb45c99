"""Smoke tests for application startup."""

import json
from pathlib import Path

import pytest

from decksmith.config import TEMPORARY_DECK_KEY, settings
from decksmith.models.deck import Deck
from decksmith.services.deck_records import serialize_deck


def test_app_imports() -> None:
    """Verify the app can be imported without errors."""
    from decksmith.main import app

    assert app.title == "Decksmith"


async def test_lifespan_wires_session(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Start-up loads the catalog and restores a pending local deck."""
    from decksmith.main import app, lifespan
    from decksmith.services.persistence import PersistenceBridge

    catalog = tmp_path / "cards.json"
    catalog.write_text(
        json.dumps([{"id": "MYL-0001", "name": "Lancelot", "type": "Aliado", "cost": 2}]),
        encoding="utf-8",
    )
    monkeypatch.setattr(settings, "catalog_path", str(catalog))
    monkeypatch.setattr(settings, "local_store_url", f"sqlite:///{tmp_path / 'local.db'}")

    async with lifespan(app):
        bridge: PersistenceBridge = app.state.bridge
        assert len(app.state.deck_session.directory) == 1
        bridge.store.set(TEMPORARY_DECK_KEY, serialize_deck(Deck(cards={"MYL-0001": 2})))

    async with lifespan(app):
        assert app.state.deck_session.quantity("MYL-0001") == 2

    del app.state.deck_session
    del app.state.bridge
