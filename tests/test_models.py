import pytest

from decksmith.models.card import CardDefinition, CardType, DeckFormat
from decksmith.models.deck import Deck, DeckCardEntry


class TestCardDefinition:
    def test_card_immutable(self) -> None:
        card = CardDefinition(id="MYL-0001", name="Lancelot", type=CardType.ALLY, edition="E")
        with pytest.raises(AttributeError):
            card.name = "Arturo"  # type: ignore[misc]

    def test_quota_per_format(self) -> None:
        card = CardDefinition(
            id="MYL-0001",
            name="Lancelot",
            type=CardType.ALLY,
            edition="E",
            quota_re=1,
            quota_rl=2,
            quota_li=3,
        )
        assert card.quota(DeckFormat.RE) == 1
        assert card.quota(DeckFormat.RL) == 2
        assert card.quota(DeckFormat.LI) == 3

    def test_has_cost(self) -> None:
        assert CardType.ALLY.has_cost
        assert CardType.WEAPON.has_cost
        assert not CardType.GOLD.has_cost
        assert not CardType.TOTEM.has_cost

    def test_format_display_name(self) -> None:
        assert DeckFormat.RE.display_name == "Racial Edición"
        assert DeckFormat("LI") is DeckFormat.LI


class TestDeck:
    def test_empty_deck(self) -> None:
        deck = Deck()
        assert deck.total_cards() == 0
        assert deck.name == "Mi Mazo"
        assert deck.format is DeckFormat.RE
        assert deck.is_pristine()

    def test_named_empty_deck_not_pristine(self) -> None:
        assert Deck(name="Otro").is_empty()
        assert not Deck(name="Otro").is_pristine()

    def test_quantity_and_total(self) -> None:
        deck = Deck(cards={"MYL-0001": 3, "MYL-0002": 2})
        assert deck.quantity("MYL-0001") == 3
        assert deck.quantity("MYL-0099") == 0
        assert deck.total_cards() == 5

    def test_entries_keep_order(self) -> None:
        deck = Deck(cards={"MYL-0002": 1, "MYL-0001": 2})
        assert deck.entries() == [DeckCardEntry("MYL-0002", 1), DeckCardEntry("MYL-0001", 2)]

    def test_copy_is_independent(self) -> None:
        deck = Deck(cards={"MYL-0001": 1})
        copy = deck.copy()
        copy.cards["MYL-0001"] = 3
        assert deck.quantity("MYL-0001") == 1

    def test_from_entries_merges_and_drops(self) -> None:
        deck = Deck.from_entries(
            [
                DeckCardEntry("MYL-0001", 1),
                DeckCardEntry("MYL-0002", 0),
                DeckCardEntry("MYL-0001", 2),
                DeckCardEntry("MYL-0003", -1),
            ],
            name="Importado",
            deck_format=DeckFormat.RL,
        )
        assert deck.cards == {"MYL-0001": 3}
        assert deck.name == "Importado"
        assert deck.format is DeckFormat.RL
