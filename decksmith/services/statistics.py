"""Deck statistics derived from the composition and the card directory."""

from collections import Counter
from types import MappingProxyType

from decksmith.models.card import CardType
from decksmith.models.deck import Deck, DeckStatistics
from decksmith.services.card_directory import CardDirectory

EMPTY_STATISTICS = DeckStatistics()


def compute_stats(deck: Deck, directory: CardDirectory) -> DeckStatistics:
    """
    Compute aggregate statistics for a deck.

    Quantities weight every figure: three copies of a card add three to
    its type and edition counts. Ids missing from the directory (a catalog
    older than the saved deck) are skipped.
    """
    if deck.total_cards() == 0:
        return EMPTY_STATISTICS

    total_cards = 0
    total_cost = 0
    by_type: Counter[str] = Counter()
    by_edition: Counter[str] = Counter()
    has_starter_gold = False

    for card_id, quantity in deck.cards.items():
        card = directory.lookup(card_id)
        if card is None:
            continue

        total_cards += quantity
        total_cost += quantity * (card.cost or 0)
        by_type[card.type.value] += quantity
        by_edition[card.edition] += quantity

        if card.type is CardType.GOLD and card.starter_gold and quantity > 0:
            has_starter_gold = True

    if total_cards == 0:
        return EMPTY_STATISTICS

    return DeckStatistics(
        total_cards=total_cards,
        total_cost=total_cost,
        average_cost=total_cost / total_cards,
        counts_by_type=MappingProxyType(dict(by_type)),
        counts_by_edition=MappingProxyType(dict(by_edition)),
        has_starter_gold=has_starter_gold,
    )


def deck_race(deck: Deck, directory: CardDirectory) -> str | None:
    """The race shared by every ally in the deck, or None if mixed or absent."""
    races = set()
    for card_id in deck.cards:
        card = directory.lookup(card_id)
        if card is not None and card.type is CardType.ALLY and card.race:
            races.add(card.race)
    return races.pop() if len(races) == 1 else None


def deck_edition(deck: Deck, directory: CardDirectory) -> str | None:
    """The edition shared by every known card in the deck, or None."""
    editions = {
        card.edition for card in map(directory.lookup, deck.cards) if card is not None
    }
    return editions.pop() if len(editions) == 1 else None
