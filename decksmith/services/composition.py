"""
Deck composition.

`DeckSession` owns the deck being edited together with its substitution
map, and is the only place the deck is mutated. Every operation is
synchronous and either applies completely or leaves the deck untouched;
expected rejections come back as `Rejected` values, never as exceptions.

INVARIANTS (hold after every operation):
- Sum of quantities <= MAX_DECK_SIZE (adds are checked; replace moves
  existing copies and so never grows the deck)
- No entry with quantity 0 is stored
- A canonical card and its alternate art are never added as two
  separate entries: adds are routed to the printing already in the deck
"""

import logging
from collections.abc import Callable

from decksmith.models.card import DeckFormat
from decksmith.models.deck import Deck, DeckStatistics
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
from decksmith.services.card_directory import CardDirectory
from decksmith.services.quota_rules import can_add
from decksmith.services.statistics import compute_stats
from decksmith.services.substitution import SubstitutionMap

logger = logging.getLogger(__name__)

DeckObserver = Callable[[Deck], None]


class DeckSession:
    """
    The deck currently being edited.

    Observers registered with `subscribe` receive a snapshot of the deck
    after every change (entries, name, format, load, clear).
    """

    def __init__(self, directory: CardDirectory, deck: Deck | None = None) -> None:
        self._directory = directory
        self._deck = Deck()
        self._substitutions = SubstitutionMap()
        self._observers: list[DeckObserver] = []
        self._stats: DeckStatistics | None = None
        if deck is not None:
            self._install(deck)

    @property
    def directory(self) -> CardDirectory:
        return self._directory

    @property
    def name(self) -> str:
        return self._deck.name

    @property
    def format(self) -> DeckFormat:
        return self._deck.format

    def snapshot(self) -> Deck:
        """Independent copy of the current deck."""
        return self._deck.copy()

    def quantity(self, card_id: str) -> int:
        return self._deck.quantity(card_id)

    def total_cards(self) -> int:
        return self._deck.total_cards()

    # --- Observers ---

    def subscribe(self, observer: DeckObserver) -> Callable[[], None]:
        """
        Register a change observer.

        Returns:
            A callable that unregisters the observer.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _changed(self) -> None:
        self._stats = None
        snapshot = self._deck.copy()
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception as e:
                # An observer must never undo or abort a completed mutation
                logger.warning("Deck observer %r failed: %s", observer, e)

    # --- Mutations ---

    def add_card(self, card_id: str) -> AddOutcome:
        """
        Add one copy of a card.

        If another printing of the same card is already in the deck, the
        copy is added to that entry instead. New entries go to the end;
        existing entries keep their position.
        """
        if card_id not in self._directory:
            logger.debug("Rejected add of unknown card %s", card_id)
            return Rejected(card_id, RejectionReason.UNKNOWN_CARD)

        target_id = self._route(card_id)
        card = self._directory.lookup(target_id)
        if card is None:
            # Routed onto an entry the catalog no longer knows
            logger.debug("Rejected add of %s onto unknown entry %s", card_id, target_id)
            return Rejected(target_id, RejectionReason.UNKNOWN_CARD)

        check = can_add(self._deck, card, self._deck.format)
        if check.reason is not None:
            logger.debug("Rejected add of %s: %s", target_id, check.reason.value)
            return Rejected(target_id, check.reason)

        quantity = self._deck.quantity(target_id) + 1
        self._deck.cards[target_id] = quantity
        if quantity == 1 and card.cosmetic:
            self._substitutions.record(self._directory.base_card_id(target_id), target_id)
        self._changed()
        return Added(target_id, quantity)

    def remove_card(self, card_id: str) -> RemoveOutcome:
        """Remove one copy of a card, dropping the entry when it reaches 0."""
        current = self._deck.quantity(card_id)
        if current == 0:
            return Rejected(card_id, RejectionReason.NOT_IN_DECK)

        if current == 1:
            del self._deck.cards[card_id]
            base_id = self._directory.base_card_id(card_id)
            if self._substitutions.current_variant(base_id) == card_id:
                self._substitutions.record(base_id, base_id)
        else:
            self._deck.cards[card_id] = current - 1

        self._changed()
        return Removed(card_id, current - 1)

    def replace_card(self, old_id: str, new_id: str) -> ReplaceOutcome:
        """
        Swap every copy of `old_id` for another printing of the same card.

        If `new_id` already has an entry, the two are merged at whichever
        position comes first. Quotas are not re-checked: a printing swap
        moves existing copies and adds none.
        """
        quantity = self._deck.quantity(old_id)
        if quantity == 0:
            return Rejected(old_id, RejectionReason.NOT_IN_DECK)

        if self._directory.lookup(new_id) is None:
            return Rejected(new_id, RejectionReason.UNKNOWN_CARD)

        base_id = self._directory.base_card_id(old_id)
        if self._directory.base_card_id(new_id) != base_id:
            return Rejected(new_id, RejectionReason.NOT_A_VARIANT)

        if old_id == new_id:
            return Replaced(old_id, new_id, quantity)

        merged = quantity + self._deck.quantity(new_id)
        cards: dict[str, int] = {}
        for card_id, qty in self._deck.cards.items():
            if card_id in (old_id, new_id):
                # First of the two positions wins; the other is dropped
                if new_id not in cards:
                    cards[new_id] = merged
                continue
            cards[card_id] = qty

        self._deck.cards = cards
        self._substitutions.record(base_id, new_id)
        self._changed()
        return Replaced(old_id, new_id, merged)

    def clear(self) -> None:
        """Remove every card. Name and format are left as they are."""
        self._deck.cards = {}
        self._substitutions.reset()
        self._changed()

    def rename(self, name: str) -> None:
        self._deck.name = name
        self._changed()

    def set_format(self, deck_format: DeckFormat) -> None:
        """
        Change the construction format.

        Existing quantities are kept even if the new format allows fewer
        copies; use `validate_deck` to report such entries.
        """
        self._deck.format = deck_format
        self._changed()

    def load(self, deck: Deck) -> None:
        """Replace the whole deck (e.g., a saved or migrated deck)."""
        self._install(deck)
        self._changed()

    def _install(self, deck: Deck) -> None:
        self._deck = Deck.from_entries(deck.entries(), name=deck.name, deck_format=deck.format)
        self._substitutions.rebuild(self._deck, self._directory)
        self._stats = None

    # --- Queries ---

    def _route(self, card_id: str) -> str:
        """Entry an add of `card_id` should land on."""
        base_id = self._directory.base_card_id(card_id)
        current = self._substitutions.current_variant(base_id)
        if current != card_id and current in self._deck.cards:
            return current
        return card_id

    def current_variant(self, base_id: str) -> str:
        """Printing used in this deck for a canonical card."""
        return self._substitutions.current_variant(base_id)

    def substitutions(self) -> dict[str, str]:
        return self._substitutions.as_dict()

    def current_stats(self) -> DeckStatistics:
        """Statistics for the current deck, cached until the next mutation."""
        if self._stats is None:
            self._stats = compute_stats(self._deck, self._directory)
        return self._stats
