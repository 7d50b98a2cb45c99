"""
Alternate-art substitution.

Tracks, for the deck being edited, which printing currently stands in for
each canonical card. The map is derived state: it can always be rebuilt
by scanning the deck for cosmetic entries.
"""

from decksmith.models.deck import Deck
from decksmith.services.card_directory import CardDirectory


class SubstitutionMap:
    """Canonical card id -> printing currently used in the deck."""

    def __init__(self) -> None:
        self._variants: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._variants)

    def __contains__(self, base_id: str) -> bool:
        return base_id in self._variants

    def rebuild(self, deck: Deck, directory: CardDirectory) -> None:
        """
        Reconstruct the map from a deck's entries.

        Every entry whose definition is cosmetic maps its canonical id to
        itself. Ids unknown to the directory are ignored.
        """
        self._variants.clear()
        for card_id in deck.cards:
            card = directory.lookup(card_id)
            if card is not None and card.cosmetic:
                self._variants[directory.base_card_id(card_id)] = card_id

    def record(self, base_id: str, variant_id: str) -> None:
        """Remember that `variant_id` now stands in for `base_id`."""
        if variant_id == base_id:
            # Swapping back to the canonical printing
            self._variants.pop(base_id, None)
        else:
            self._variants[base_id] = variant_id

    def current_variant(self, base_id: str) -> str:
        """Printing used for a canonical card (the canonical id if none)."""
        return self._variants.get(base_id, base_id)

    def reset(self) -> None:
        self._variants.clear()

    def as_dict(self) -> dict[str, str]:
        return dict(self._variants)
