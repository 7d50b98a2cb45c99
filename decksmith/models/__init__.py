from decksmith.models.card import (
    FORMAT_NAMES,
    Canonical,
    CardDefinition,
    CardRef,
    CardType,
    DeckFormat,
    Variant,
)
from decksmith.models.deck import Deck, DeckCardEntry, DeckStatistics
from decksmith.models.outcome import (
    AddOutcome,
    Added,
    Rejected,
    RejectionReason,
    RemoveOutcome,
    Removed,
    Replaced,
    ReplaceOutcome,
)

__all__ = [
    "AddOutcome",
    "Added",
    "Canonical",
    "CardDefinition",
    "CardRef",
    "CardType",
    "Deck",
    "DeckCardEntry",
    "DeckFormat",
    "DeckStatistics",
    "FORMAT_NAMES",
    "Rejected",
    "RejectionReason",
    "RemoveOutcome",
    "Removed",
    "ReplaceOutcome",
    "Replaced",
    "Variant",
]
