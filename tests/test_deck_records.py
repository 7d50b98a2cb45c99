"""Tests for the persisted deck record format."""

import json

import pytest

from decksmith.config import RECORD_VERSION
from decksmith.models.card import DeckFormat
from decksmith.models.deck import Deck
from decksmith.services.deck_records import (
    DeckRecordError,
    deck_from_record,
    deck_to_record,
    deserialize_deck,
    serialize_deck,
)


class TestDeckToRecord:
    def test_record_shape(self) -> None:
        deck = Deck(name="Caballeros", format=DeckFormat.RL, cards={"MYL-0001": 2})

        record = deck_to_record(deck, saved_at=1700000000000)

        assert record == {
            "version": RECORD_VERSION,
            "name": "Caballeros",
            "format": "RL",
            "cards": [{"cardId": "MYL-0001", "quantity": 2}],
            "savedAt": 1700000000000,
        }

    def test_saved_at_defaults_to_now(self) -> None:
        record = deck_to_record(Deck())

        assert isinstance(record["savedAt"], int)
        assert record["savedAt"] > 0


class TestDeckFromRecord:
    def test_round_trip(self) -> None:
        deck = Deck(
            name="Olimpo",
            format=DeckFormat.LI,
            cards={"MYL-0002": 1, "MYL-0001-AA": 3, "MYL-0004": 1},
        )

        restored = deserialize_deck(serialize_deck(deck))

        assert restored.name == deck.name
        assert restored.format is deck.format
        assert restored.cards == deck.cards

    def test_record_without_version(self) -> None:
        """Records saved before versioning are still readable."""
        record = {
            "name": "Viejo",
            "format": "RE",
            "cards": [{"cardId": "MYL-0001", "quantity": 3}],
            "savedAt": 1,
        }

        deck = deck_from_record(record)

        assert deck.name == "Viejo"
        assert deck.cards == {"MYL-0001": 3}

    def test_newer_version_rejected(self) -> None:
        with pytest.raises(DeckRecordError, match="version"):
            deck_from_record({"version": RECORD_VERSION + 1, "cards": []})

    def test_defaults_for_missing_fields(self) -> None:
        deck = deck_from_record({"version": 1})

        assert deck == Deck()

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(DeckRecordError, match="format"):
            deck_from_record({"format": "XX", "cards": []})

    def test_malformed_entries_dropped(self) -> None:
        record = {
            "cards": [
                {"cardId": "MYL-0001", "quantity": 2},
                {"cardId": "MYL-0002", "quantity": 0},
                {"cardId": "MYL-0003", "quantity": "3"},
                {"quantity": 1},
                "MYL-0004",
                {"cardId": "MYL-0001", "quantity": 1},
            ]
        }

        deck = deck_from_record(record)

        assert deck.cards == {"MYL-0001": 3}

    @pytest.mark.parametrize("record", [None, [], "deck", 3])
    def test_non_object_rejected(self, record: object) -> None:
        with pytest.raises(DeckRecordError):
            deck_from_record(record)

    def test_cards_must_be_list(self) -> None:
        with pytest.raises(DeckRecordError, match="cards"):
            deck_from_record({"cards": {"MYL-0001": 2}})


class TestDeserializeDeck:
    def test_invalid_json(self) -> None:
        with pytest.raises(DeckRecordError, match="not valid JSON"):
            deserialize_deck("{not json")

    def test_keeps_non_ascii_names(self) -> None:
        deck = Deck(name="Tótem Helénico")

        payload = serialize_deck(deck)

        assert "Tótem Helénico" in payload
        assert json.loads(payload)["name"] == "Tótem Helénico"
