"""
Persisted deck record format.

The same record shape is used by the local store, the deck service and
JSON import/export:

    {"version": 1, "name": str, "format": "RE"|"RL"|"LI",
     "cards": [{"cardId": str, "quantity": int}], "savedAt": int}

Records written before versioning carry no "version" key and are read
as version 0 with the same fields.
"""

import json
import time
from typing import Any

from decksmith.config import DEFAULT_DECK_NAME, RECORD_VERSION
from decksmith.models.card import DeckFormat
from decksmith.models.deck import Deck, DeckCardEntry


class DeckRecordError(ValueError):
    """A persisted deck record could not be read."""


def deck_to_record(deck: Deck, saved_at: int | None = None) -> dict[str, Any]:
    """Persisted-record dict for a deck."""
    return {
        "version": RECORD_VERSION,
        "name": deck.name,
        "format": deck.format.value,
        "cards": [
            {"cardId": entry.card_id, "quantity": entry.quantity} for entry in deck.entries()
        ],
        "savedAt": saved_at if saved_at is not None else int(time.time() * 1000),
    }


def deck_from_record(record: Any) -> Deck:
    """
    Read a deck from a persisted-record dict.

    Card entries that are malformed or have a non-positive quantity are
    dropped; a missing name or format falls back to the defaults.

    Raises:
        DeckRecordError: If the record is not an object, is from a newer
            schema version, or names an unknown format
    """
    if not isinstance(record, dict):
        raise DeckRecordError(f"Expected a deck object, got {type(record).__name__}")

    version = record.get("version", 0)
    if not isinstance(version, int) or version > RECORD_VERSION:
        raise DeckRecordError(f"Unsupported deck record version: {version!r}")

    raw_format = record.get("format") or DeckFormat.RE.value
    try:
        deck_format = DeckFormat(raw_format)
    except ValueError as e:
        raise DeckRecordError(f"Unknown deck format: {raw_format!r}") from e

    entries: list[DeckCardEntry] = []
    raw_cards = record.get("cards") or []
    if not isinstance(raw_cards, list):
        raise DeckRecordError("Deck record 'cards' must be a list")

    for raw in raw_cards:
        if not isinstance(raw, dict):
            continue
        card_id = raw.get("cardId")
        quantity = raw.get("quantity")
        if not isinstance(card_id, str) or not isinstance(quantity, int) or quantity <= 0:
            continue
        entries.append(DeckCardEntry(card_id, quantity))

    name = record.get("name")
    return Deck.from_entries(
        entries,
        name=name if isinstance(name, str) and name else DEFAULT_DECK_NAME,
        deck_format=deck_format,
    )


def serialize_deck(deck: Deck) -> str:
    return json.dumps(deck_to_record(deck), ensure_ascii=False)


def deserialize_deck(payload: str) -> Deck:
    """
    Parse a JSON deck record.

    Raises:
        DeckRecordError: If the payload is not a readable deck record
    """
    try:
        record = json.loads(payload)
    except json.JSONDecodeError as e:
        raise DeckRecordError(f"Deck record is not valid JSON: {e}") from e
    return deck_from_record(record)

