"""Randomized operation sequences: deck invariants hold after every step."""

import random

import pytest

from decksmith.config import MAX_DECK_SIZE
from decksmith.models.card import DeckFormat
from decksmith.models.outcome import Rejected
from decksmith.services.card_directory import CardDirectory
from decksmith.services.composition import DeckSession
from decksmith.services.quota_rules import effective_cap


def _assert_invariants(session: DeckSession, directory: CardDirectory) -> None:
    deck = session.snapshot()
    assert deck.total_cards() <= MAX_DECK_SIZE
    assert all(quantity > 0 for quantity in deck.cards.values())

    bases = [directory.base_card_id(card_id) for card_id in deck.cards]
    assert len(bases) == len(set(bases)), "card present under two printings"

    for card_id, quantity in deck.cards.items():
        card = directory.lookup(card_id)
        assert card is not None
        assert quantity <= effective_cap(card, deck.format)


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("deck_format", list(DeckFormat))
def test_random_operations_keep_invariants(
    directory: CardDirectory, seed: int, deck_format: DeckFormat
) -> None:
    rng = random.Random(seed)
    session = DeckSession(directory)
    session.set_format(deck_format)
    card_ids = [card.id for card in directory.all()] + ["NOPE-0001"]

    for _ in range(300):
        action = rng.random()
        card_id = rng.choice(card_ids)
        if action < 0.7:
            session.add_card(card_id)
        elif action < 0.9:
            session.remove_card(card_id)
        else:
            in_deck = list(session.snapshot().cards)
            if in_deck:
                old_id = rng.choice(in_deck)
                variants = [c.id for c in directory.variants_of(old_id)]
                base_id = directory.base_card_id(old_id)
                session.replace_card(old_id, rng.choice(variants + [base_id]))
        _assert_invariants(session, directory)


def test_rejected_operations_leave_deck_unchanged(directory: CardDirectory) -> None:
    rng = random.Random(7)
    session = DeckSession(directory)
    card_ids = [card.id for card in directory.all()] + ["NOPE-0001"]

    for _ in range(300):
        card_id = rng.choice(card_ids)
        before = session.snapshot()
        outcome = session.add_card(card_id) if rng.random() < 0.8 else session.remove_card(card_id)
        if isinstance(outcome, Rejected):
            assert session.snapshot() == before
