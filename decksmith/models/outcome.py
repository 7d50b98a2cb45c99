"""
Mutation outcomes.

Deck mutations never raise for expected rejections (unknown card, full
deck, quota reached). They return one of the outcome values below so
callers can tell a no-op from a change without inspecting the deck.
"""

from dataclasses import dataclass
from enum import Enum


class RejectionReason(str, Enum):
    """Why a mutation left the deck unchanged."""

    UNKNOWN_CARD = "unknown_card"
    DECK_FULL = "deck_full"
    BANNED = "banned"
    UNIQUE_LIMIT = "unique_limit"
    QUOTA_LIMIT = "quota_limit"
    NOT_IN_DECK = "not_in_deck"
    NOT_A_VARIANT = "not_a_variant"


@dataclass(frozen=True, slots=True)
class Added:
    card_id: str
    quantity: int


@dataclass(frozen=True, slots=True)
class Removed:
    card_id: str
    quantity: int  # Remaining copies, 0 when the entry was dropped


@dataclass(frozen=True, slots=True)
class Replaced:
    old_id: str
    new_id: str
    quantity: int  # Quantity now held by the surviving entry


@dataclass(frozen=True, slots=True)
class Rejected:
    card_id: str
    reason: RejectionReason


AddOutcome = Added | Rejected
RemoveOutcome = Removed | Rejected
ReplaceOutcome = Replaced | Rejected
