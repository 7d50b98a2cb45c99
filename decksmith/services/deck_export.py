"""
Deck export and import.

Formats:
- Deck code: card ids separated by spaces, one id per copy
- Deck list: "{quantity}x {name}" lines, grouped by card type
- JSON: the persisted deck record (see deck_records)
"""

import json

from decksmith.config import MAX_DECK_SIZE
from decksmith.models.card import CardType
from decksmith.models.deck import Deck, DeckCardEntry
from decksmith.services.card_directory import CardDirectory
from decksmith.services.deck_records import deck_to_record, deserialize_deck
from decksmith.services.statistics import compute_stats

TYPE_ORDER = [CardType.ALLY, CardType.WEAPON, CardType.TALISMAN, CardType.TOTEM, CardType.GOLD]


def deck_code(deck: Deck) -> str:
    """Space-separated card ids, repeated once per copy, in deck order."""
    codes: list[str] = []
    for card_id, quantity in deck.cards.items():
        codes.extend([card_id] * quantity)
    return " ".join(codes)


def parse_deck_code(code: str) -> list[DeckCardEntry]:
    """
    Parse a deck code back into entries.

    Repeated ids are counted; the first occurrence fixes the order.
    No rules are applied: feed the entries through a DeckSession or
    validate_deck to enforce quotas.
    """
    counts: dict[str, int] = {}
    for card_id in code.split():
        counts[card_id] = counts.get(card_id, 0) + 1
    return [DeckCardEntry(card_id, quantity) for card_id, quantity in counts.items()]


def deck_list_text(deck: Deck, directory: CardDirectory, include_stats: bool = False) -> str:
    """
    Human-readable deck list.

    Cards are grouped by type (allies first, gold last) and sorted by
    cost within each group. Ids unknown to the directory are left out.
    """
    grouped: dict[CardType, list[tuple[int, str, int | None]]] = {t: [] for t in TYPE_ORDER}
    for card_id, quantity in deck.cards.items():
        card = directory.lookup(card_id)
        if card is None:
            continue
        grouped[card.type].append((quantity, card.name, card.cost))

    lines = [f"{deck.name} ({deck.format.value})", ""]

    if include_stats:
        stats = compute_stats(deck, directory)
        lines.append(f"Cards: {stats.total_cards}/{MAX_DECK_SIZE}")
        lines.append(f"Average cost: {stats.average_cost:.2f}")
        lines.append("")

    for card_type in TYPE_ORDER:
        cards = grouped[card_type]
        if not cards:
            continue
        lines.append(f"{card_type.value} ({sum(qty for qty, _, _ in cards)})")
        for quantity, name, _cost in sorted(cards, key=lambda c: c[2] or 0):
            lines.append(f"{quantity}x {name}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def deck_to_json(deck: Deck) -> str:
    return json.dumps(deck_to_record(deck), ensure_ascii=False, indent=2)


def deck_from_json(text: str) -> Deck:
    """
    Import a deck exported with deck_to_json.

    Raises:
        DeckRecordError: If the text is not a readable deck record
    """
    return deserialize_deck(text)
