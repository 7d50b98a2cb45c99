"""
Card directory service.

Read-only catalog of card definitions keyed by identifier. Canonical
cards and their alternate-art printings are indexed together, so any id
found in a deck can be looked up directly.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from decksmith.models.card import Canonical, CardDefinition, CardRef, CardType, Variant

logger = logging.getLogger(__name__)


def base_card_id(card_id: str) -> str:
    """
    Canonical id for any card id.

    Catalog ids are "MYL-XXXX"; alternate-art printings append a suffix
    ("MYL-XXXX-AA"). Keeping the first two dash-separated segments maps
    both to the canonical id, and is a no-op on canonical ids.
    """
    return "-".join(card_id.split("-")[:2])


# Display order of editions in the card browser; unlisted editions go last
EDITION_ORDER = [
    "Espada Sagrada",
    "Helénica",
    "Hijos de Daana",
    "Dominios de Ra",
    "Drácula",
]


def _id_number(card_id: str) -> int:
    """Numeric part of a catalog id ("MYL-0042" -> 42), 0 if there is none."""
    parts = card_id.split("-")
    return int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else 0


def sort_cards(cards: Iterable[CardDefinition]) -> list[CardDefinition]:
    """Sort cards by edition display order, then by catalog number."""
    rank = {edition: i for i, edition in enumerate(EDITION_ORDER)}
    return sorted(
        cards,
        key=lambda card: (rank.get(card.edition, len(EDITION_ORDER)), _id_number(card.id)),
    )


class CardDirectory:
    """
    Immutable lookup of card definitions.

    Iteration order is catalog order.
    """

    def __init__(self, cards: Iterable[CardDefinition]) -> None:
        self._cards: dict[str, CardDefinition] = {}
        for card in cards:
            if card.id in self._cards:
                logger.warning("Duplicate card id in catalog: %s (keeping first)", card.id)
                continue
            self._cards[card.id] = card

    def __contains__(self, card_id: str) -> bool:
        return card_id in self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def lookup(self, card_id: str) -> CardDefinition | None:
        """Definition for an id, or None if the catalog has no such card."""
        return self._cards.get(card_id)

    def all(self) -> Iterator[CardDefinition]:
        """All definitions; each call starts a fresh iteration."""
        return iter(self._cards.values())

    def base_card_id(self, card_id: str) -> str:
        card = self._cards.get(card_id)
        if card is not None and card.cosmetic and card.base_id:
            return card.base_id
        return base_card_id(card_id)

    def card_ref(self, card_id: str) -> CardRef:
        """Tagged canonical/variant reference for an id."""
        base = self.base_card_id(card_id)
        if base == card_id:
            return Canonical(card_id)
        return Variant(card_id, of_canonical=base)

    def variants_of(self, card_id: str) -> list[CardDefinition]:
        """Alternate-art printings sharing the card's canonical id."""
        base = self.base_card_id(card_id)
        return [
            card
            for card in self._cards.values()
            if card.cosmetic and self.base_card_id(card.id) == base
        ]

    def canonical_cards(self) -> list[CardDefinition]:
        """Non-cosmetic cards only (the card browser view)."""
        return [card for card in self._cards.values() if not card.cosmetic]

    # --- Browser helper views ---

    def editions(self) -> list[str]:
        return sorted({card.edition for card in self._cards.values()})

    def types(self) -> list[str]:
        return sorted({card.type.value for card in self._cards.values()})

    def races(self) -> list[str]:
        return sorted({card.race for card in self._cards.values() if card.race is not None})

    def costs(self) -> list[int]:
        return sorted({card.cost for card in self._cards.values() if card.cost is not None})

    def filter_cards(
        self,
        search: str = "",
        edition: str | None = None,
        card_type: CardType | None = None,
        race: str | None = None,
        cost: int | None = None,
    ) -> list[CardDefinition]:
        """
        Canonical cards matching every given filter.

        Args:
            search: Case-insensitive name substring (blank matches all)
            edition: Exact edition name
            card_type: Exact card type
            race: Exact race
            cost: Exact cost

        Returns:
            Matching cards sorted by edition, then catalog number.
        """
        needle = search.strip().lower()
        result: list[CardDefinition] = []
        for card in self.canonical_cards():
            if needle and needle not in card.name.lower():
                continue
            if edition is not None and card.edition != edition:
                continue
            if card_type is not None and card.type is not card_type:
                continue
            if race is not None and card.race != race:
                continue
            if cost is not None and card.cost != cost:
                continue
            result.append(card)
        return sort_cards(result)


def _clamp_quota(value: Any) -> int:
    return max(0, min(3, int(value)))


def parse_card_record(record: dict[str, Any]) -> CardDefinition:
    """
    Build a CardDefinition from a catalog record.

    Raises:
        KeyError: If a required field is missing
        ValueError: If a field has an invalid value
    """
    card_type = CardType(record["type"])
    cosmetic = bool(record.get("isCosmetic", False))
    card_id = str(record["id"])

    cost = record.get("cost") if card_type.has_cost else None
    power = record.get("power") if card_type.has_cost else None

    return CardDefinition(
        id=card_id,
        name=str(record["name"]),
        type=card_type,
        edition=str(record.get("edition", "")),
        cost=int(cost) if cost is not None else None,
        power=int(power) if power is not None else None,
        race=record.get("race") if card_type.has_cost else None,
        unique=bool(record.get("isUnique", False)),
        quota_re=_clamp_quota(record.get("banListRE", 3)),
        quota_rl=_clamp_quota(record.get("banListRL", 3)),
        quota_li=_clamp_quota(record.get("banListLI", 3)),
        cosmetic=cosmetic,
        base_id=(record.get("baseId") or base_card_id(card_id)) if cosmetic else None,
        starter_gold=card_type is CardType.GOLD and bool(record.get("isOroIni", False)),
    )


def parse_card_records(records: Iterable[dict[str, Any]]) -> list[CardDefinition]:
    """Parse catalog records, skipping (and logging) malformed ones."""
    cards: list[CardDefinition] = []
    for record in records:
        try:
            cards.append(parse_card_record(record))
        except (KeyError, TypeError, ValueError) as e:
            label = record.get("id") if isinstance(record, dict) else record
            logger.warning("Skipping malformed catalog record %r: %s", label, e)
    return cards


def load_card_directory(path: Path | str) -> CardDirectory:
    """
    Load the card directory from a JSON catalog file.

    The file holds a list of card records; alternate-art records may be
    in the same list or under an "alternateArt" key of an object
    ({"cards": [...], "alternateArt": [...]}).

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Card catalog not found at {path}.")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        records = list(data.get("cards", [])) + list(data.get("alternateArt", []))
    else:
        records = list(data)

    directory = CardDirectory(parse_card_records(records))
    logger.info("Loaded %d cards from %s", len(directory), path)
    return directory
