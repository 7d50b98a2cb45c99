"""
Decksmith services.

Deck composition rules, alternate-art substitution, statistics and
persistence for the deck being edited.
"""

from decksmith.services.card_directory import (
    CardDirectory,
    base_card_id,
    load_card_directory,
    parse_card_record,
    parse_card_records,
    sort_cards,
)
from decksmith.services.composition import DeckObserver, DeckSession
from decksmith.services.deck_export import (
    deck_code,
    deck_from_json,
    deck_list_text,
    deck_to_json,
    parse_deck_code,
)
from decksmith.services.deck_records import (
    DeckRecordError,
    deck_from_record,
    deck_to_record,
    deserialize_deck,
    serialize_deck,
)
from decksmith.services.persistence import (
    LocalStore,
    LocalStoreError,
    MemoryLocalStore,
    PersistenceBridge,
    SqlLocalStore,
)
from decksmith.services.quota_rules import (
    AddCheck,
    DeckViolation,
    can_add,
    effective_cap,
    validate_deck,
)
from decksmith.services.remote_decks import RemoteDeckClient, RemoteDeckError, RemoteDeckSource
from decksmith.services.statistics import compute_stats, deck_edition, deck_race
from decksmith.services.substitution import SubstitutionMap

__all__ = [
    # Card directory
    "CardDirectory",
    "base_card_id",
    "load_card_directory",
    "parse_card_record",
    "parse_card_records",
    "sort_cards",
    # Rules
    "AddCheck",
    "DeckViolation",
    "can_add",
    "effective_cap",
    "validate_deck",
    # Composition
    "DeckObserver",
    "DeckSession",
    "SubstitutionMap",
    # Statistics
    "compute_stats",
    "deck_edition",
    "deck_race",
    # Records and persistence
    "DeckRecordError",
    "deck_from_record",
    "deck_to_record",
    "deserialize_deck",
    "serialize_deck",
    "LocalStore",
    "LocalStoreError",
    "MemoryLocalStore",
    "PersistenceBridge",
    "SqlLocalStore",
    "RemoteDeckClient",
    "RemoteDeckError",
    "RemoteDeckSource",
    # Export
    "deck_code",
    "deck_from_json",
    "deck_list_text",
    "deck_to_json",
    "parse_deck_code",
]
