from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from decksmith.config import DEFAULT_DECK_NAME
from decksmith.models.card import DeckFormat


@dataclass(frozen=True, slots=True)
class DeckCardEntry:
    """A card identifier with its quantity (always > 0 inside a deck)."""

    card_id: str
    quantity: int


@dataclass
class Deck:
    """
    A deck under construction.

    Attributes:
        name: Deck name
        format: Construction format the quotas are read from
        cards: {card_id: quantity}, insertion order is display order
    """

    name: str = DEFAULT_DECK_NAME
    format: DeckFormat = DeckFormat.RE
    cards: dict[str, int] = field(default_factory=dict)

    def quantity(self, card_id: str) -> int:
        """Copies of an identifier in the deck (0 if absent)."""
        return self.cards.get(card_id, 0)

    def total_cards(self) -> int:
        """Sum of quantities."""
        return sum(self.cards.values())

    def entries(self) -> list[DeckCardEntry]:
        """Entries in insertion order."""
        return [DeckCardEntry(card_id, qty) for card_id, qty in self.cards.items()]

    def is_empty(self) -> bool:
        return not self.cards

    def is_pristine(self) -> bool:
        """Empty and still carrying the default name."""
        return self.is_empty() and self.name == DEFAULT_DECK_NAME

    def copy(self) -> "Deck":
        return Deck(name=self.name, format=self.format, cards=dict(self.cards))

    @classmethod
    def from_entries(
        cls,
        entries: list[DeckCardEntry],
        name: str = DEFAULT_DECK_NAME,
        deck_format: DeckFormat = DeckFormat.RE,
    ) -> "Deck":
        """Build a deck, merging repeated ids and dropping non-positive quantities."""
        cards: dict[str, int] = {}
        for entry in entries:
            if entry.quantity <= 0:
                continue
            cards[entry.card_id] = cards.get(entry.card_id, 0) + entry.quantity
        return cls(name=name, format=deck_format, cards=cards)


@dataclass(frozen=True)
class DeckStatistics:
    """
    Aggregate figures derived from a deck and the card directory.

    Count mappings are read-only views: instances are shared (cached
    stats, the empty result) and must not change under other callers.
    """

    total_cards: int = 0
    total_cost: int = 0
    average_cost: float = 0.0
    counts_by_type: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    counts_by_edition: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    has_starter_gold: bool = False
