"""
Card catalog models.

Cards are loaded once from the catalog and never mutated afterwards.
Alternate-art printings are full cards flagged as cosmetic; the link to
their canonical card is carried by `base_id`.
"""

from dataclasses import dataclass
from enum import Enum


class DeckFormat(str, Enum):
    """Deck construction formats, each with its own quota table."""

    RE = "RE"  # Racial Edición
    RL = "RL"  # Racial Libre
    LI = "LI"  # Formato Libre

    @property
    def display_name(self) -> str:
        return FORMAT_NAMES[self]


FORMAT_NAMES = {
    DeckFormat.RE: "Racial Edición",
    DeckFormat.RL: "Racial Libre",
    DeckFormat.LI: "Formato Libre",
}


class CardType(str, Enum):
    """Card types as named in the catalog."""

    ALLY = "Aliado"
    WEAPON = "Arma"
    TALISMAN = "Talismán"
    TOTEM = "Tótem"
    GOLD = "Oro"

    @property
    def has_cost(self) -> bool:
        """Only allies and weapons carry cost, power and race."""
        return self in (CardType.ALLY, CardType.WEAPON)


@dataclass(frozen=True, slots=True)
class CardDefinition:
    """
    A single catalog card.

    Attributes:
        id: Catalog identifier (e.g., "MYL-0042", "MYL-0042-AA" for alternate art)
        name: Display name
        type: Card type
        edition: Edition (set) name
        cost: Play cost, allies and weapons only
        power: Strength, allies and weapons only
        race: Race, allies and weapons only
        unique: Capped at one copy regardless of quota
        quota_re: Legal copies in RE (0 = banned)
        quota_rl: Legal copies in RL
        quota_li: Legal copies in LI
        cosmetic: Alternate-art printing of another card
        base_id: Canonical card id, set iff cosmetic
        starter_gold: Gold card eligible as the deck's starting gold
    """

    id: str
    name: str
    type: CardType
    edition: str
    cost: int | None = None
    power: int | None = None
    race: str | None = None
    unique: bool = False
    quota_re: int = 3
    quota_rl: int = 3
    quota_li: int = 3
    cosmetic: bool = False
    base_id: str | None = None
    starter_gold: bool = False

    def quota(self, deck_format: DeckFormat) -> int:
        """Ban-list value for the given format."""
        if deck_format is DeckFormat.RE:
            return self.quota_re
        if deck_format is DeckFormat.RL:
            return self.quota_rl
        return self.quota_li


@dataclass(frozen=True, slots=True)
class Canonical:
    """Reference to a canonical (base) card."""

    id: str


@dataclass(frozen=True, slots=True)
class Variant:
    """Reference to an alternate-art printing of a canonical card."""

    id: str
    of_canonical: str


CardRef = Canonical | Variant
