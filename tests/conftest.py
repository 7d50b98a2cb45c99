import pytest

from decksmith.models.card import CardDefinition, CardType
from decksmith.services.card_directory import CardDirectory


def make_card(card_id: str, **overrides) -> CardDefinition:
    """Ally with quota 3 in every format unless overridden."""
    fields = {
        "id": card_id,
        "name": card_id.title(),
        "type": CardType.ALLY,
        "edition": "Espada Sagrada",
        "cost": 1,
        "power": 1,
        "race": "Caballero",
    }
    fields.update(overrides)
    return CardDefinition(**fields)


@pytest.fixture
def sample_cards() -> list[CardDefinition]:
    """Small catalog covering every rule the engine applies."""
    return [
        make_card("MYL-0001", name="Lancelot", cost=2, power=2),
        make_card(
            "MYL-0001-AA",
            name="Lancelot",
            cost=2,
            power=2,
            cosmetic=True,
            base_id="MYL-0001",
        ),
        make_card(
            "MYL-0002",
            name="Excalibur",
            type=CardType.WEAPON,
            cost=3,
            power=2,
            quota_re=2,
        ),
        make_card("MYL-0003", name="Merlín", unique=True, race="Sacerdote", quota_rl=3),
        make_card(
            "MYL-0004",
            name="Oro Inicial",
            type=CardType.GOLD,
            cost=None,
            power=None,
            race=None,
            starter_gold=True,
        ),
        make_card(
            "MYL-0005",
            name="Tótem Prohibido",
            type=CardType.TOTEM,
            cost=2,
            power=None,
            race=None,
            quota_re=0,
        ),
        make_card(
            "MYL-0006",
            name="Talismán de Zeus",
            type=CardType.TALISMAN,
            edition="Helénica",
            cost=1,
            power=None,
            race=None,
        ),
        make_card("MYL-0007", name="Oro", type=CardType.GOLD, cost=None, power=None, race=None),
        make_card("BASE-001", name="Arturo", cost=4, power=4),
        make_card(
            "BASE-001-ALT",
            name="Arturo",
            cost=4,
            power=4,
            cosmetic=True,
            base_id="BASE-001",
        ),
    ]


@pytest.fixture
def filler_cards() -> list[CardDefinition]:
    """Twenty plain allies (60 legal copies) for filling a deck to capacity."""
    return [make_card(f"FILL-{n:04d}", name=f"Filler {n}") for n in range(1, 21)]


@pytest.fixture
def directory(sample_cards: list[CardDefinition], filler_cards) -> CardDirectory:
    return CardDirectory(sample_cards + filler_cards)
