"""
Deck construction quota rules.

Decides whether one more copy of a card may enter a deck:
- A deck holds at most MAX_DECK_SIZE cards.
- Each format has its own ban-list quota per card (0 = banned).
- Unique cards are capped at one copy whatever the quota says.

These checks are pure functions of the deck snapshot, the card and the
format. Results are never cached: the format and catalog quotas can
change between calls.
"""

from collections import Counter
from dataclasses import dataclass

from decksmith.config import MAX_DECK_SIZE
from decksmith.models.card import CardDefinition, DeckFormat
from decksmith.models.deck import Deck
from decksmith.models.outcome import RejectionReason
from decksmith.services.card_directory import CardDirectory


@dataclass(frozen=True, slots=True)
class AddCheck:
    """Result of an add-legality check."""

    allowed: bool
    reason: RejectionReason | None = None


ALLOWED = AddCheck(allowed=True)


def effective_cap(card: CardDefinition, deck_format: DeckFormat) -> int:
    """Maximum legal copies of a card in a format."""
    quota = card.quota(deck_format)
    return min(quota, 1) if card.unique else quota


def can_add(deck: Deck, card: CardDefinition, deck_format: DeckFormat) -> AddCheck:
    """
    Check whether one more copy of `card` may be added.

    Args:
        deck: Current deck snapshot
        card: Definition of the card being added
        deck_format: Format whose quota table applies

    Returns:
        AddCheck with the first rule that rejects the add, if any.
    """
    if deck.total_cards() + 1 > MAX_DECK_SIZE:
        return AddCheck(allowed=False, reason=RejectionReason.DECK_FULL)

    current = deck.quantity(card.id)
    quota = card.quota(deck_format)
    if quota == 0:
        return AddCheck(allowed=False, reason=RejectionReason.BANNED)

    if current >= effective_cap(card, deck_format):
        if card.unique:
            return AddCheck(allowed=False, reason=RejectionReason.UNIQUE_LIMIT)
        return AddCheck(allowed=False, reason=RejectionReason.QUOTA_LIMIT)

    return ALLOWED


# =============================================================================
# WHOLE-DECK AUDIT
# =============================================================================


@dataclass(frozen=True, slots=True)
class DeckViolation:
    """A rule broken by a deck as a whole (e.g., after loading a saved deck)."""

    card_id: str | None
    reason: RejectionReason
    detail: str


def validate_deck(deck: Deck, directory: CardDirectory) -> list[DeckViolation]:
    """
    Audit a complete deck against the construction rules.

    Used on decks that did not come through add_card (loaded, imported,
    or reconciled decks). Never raises; an empty list means the deck is
    legal in its format.
    """
    violations: list[DeckViolation] = []

    total = deck.total_cards()
    if total > MAX_DECK_SIZE:
        violations.append(
            DeckViolation(
                card_id=None,
                reason=RejectionReason.DECK_FULL,
                detail=f"{total} cards exceeds the maximum of {MAX_DECK_SIZE}",
            )
        )

    logical_cards: Counter[str] = Counter()
    for card_id, quantity in deck.cards.items():
        card = directory.lookup(card_id)
        if card is None:
            violations.append(
                DeckViolation(card_id, RejectionReason.UNKNOWN_CARD, "not in the card catalog")
            )
            continue

        logical_cards[directory.base_card_id(card_id)] += 1

        cap = effective_cap(card, deck.format)
        if quantity > cap:
            if card.quota(deck.format) == 0:
                reason = RejectionReason.BANNED
            elif card.unique:
                reason = RejectionReason.UNIQUE_LIMIT
            else:
                reason = RejectionReason.QUOTA_LIMIT
            violations.append(
                DeckViolation(
                    card_id,
                    reason,
                    f"{quantity} copies, at most {cap} allowed in {deck.format.value}",
                )
            )

    for base_id, printings in logical_cards.items():
        if printings > 1:
            violations.append(
                DeckViolation(
                    base_id,
                    RejectionReason.QUOTA_LIMIT,
                    f"present under {printings} different printings",
                )
            )

    return violations
