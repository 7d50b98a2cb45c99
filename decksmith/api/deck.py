"""
Deck API endpoints.

Exposes the deck being edited to the display layer. Rule rejections are
part of a normal response (`outcome: "rejected"`), not HTTP errors.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from decksmith.config import MAX_DECK_SIZE
from decksmith.models.card import DeckFormat
from decksmith.models.deck import Deck
from decksmith.models.outcome import Added, Rejected, Removed, Replaced
from decksmith.services.composition import DeckSession
from decksmith.services.deck_export import (
    deck_code,
    deck_from_json,
    deck_list_text,
    deck_to_json,
    parse_deck_code,
)
from decksmith.services.deck_records import DeckRecordError
from decksmith.services.quota_rules import validate_deck

router = APIRouter(prefix="/deck", tags=["deck"])


def get_deck_session(request: Request) -> DeckSession:
    """Dependency that provides the deck session owned by the app."""
    session: DeckSession = request.app.state.deck_session
    return session


SessionDep = Annotated[DeckSession, Depends(get_deck_session)]


class DeckEntryResponse(BaseModel):
    card_id: str
    quantity: int


class DeckResponse(BaseModel):
    """Response model for the deck being edited."""

    name: str
    format: DeckFormat
    cards: list[DeckEntryResponse] = Field(default_factory=list)
    total_cards: int
    max_cards: int = MAX_DECK_SIZE


class MutationResponse(BaseModel):
    """Outcome of a deck mutation plus the resulting deck."""

    outcome: Literal["added", "removed", "replaced", "rejected"]
    card_id: str
    quantity: int | None = None
    reason: str | None = None
    deck: DeckResponse


class RenameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class FormatRequest(BaseModel):
    format: DeckFormat


class ReplaceRequest(BaseModel):
    old_id: str
    new_id: str


class StatsResponse(BaseModel):
    total_cards: int
    total_cost: int
    average_cost: float
    counts_by_type: dict[str, int]
    counts_by_edition: dict[str, int]
    has_starter_gold: bool


class VariantResponse(BaseModel):
    base_id: str
    card_id: str


class ViolationResponse(BaseModel):
    card_id: str | None
    reason: str
    detail: str


ExportFormat = Literal["code", "text", "json"]


class ExportResponse(BaseModel):
    format: ExportFormat
    content: str


class ImportRequest(BaseModel):
    """A deck code or a JSON deck record to load as the deck being edited."""

    format: Literal["code", "json"]
    content: str


def deck_response(deck: Deck) -> DeckResponse:
    return DeckResponse(
        name=deck.name,
        format=deck.format,
        cards=[DeckEntryResponse(card_id=e.card_id, quantity=e.quantity) for e in deck.entries()],
        total_cards=deck.total_cards(),
    )


def _mutation_response(
    outcome: Added | Removed | Replaced | Rejected, session: DeckSession
) -> MutationResponse:
    deck = deck_response(session.snapshot())
    if isinstance(outcome, Rejected):
        return MutationResponse(
            outcome="rejected", card_id=outcome.card_id, reason=outcome.reason.value, deck=deck
        )
    if isinstance(outcome, Added):
        return MutationResponse(
            outcome="added", card_id=outcome.card_id, quantity=outcome.quantity, deck=deck
        )
    if isinstance(outcome, Removed):
        return MutationResponse(
            outcome="removed", card_id=outcome.card_id, quantity=outcome.quantity, deck=deck
        )
    return MutationResponse(
        outcome="replaced", card_id=outcome.new_id, quantity=outcome.quantity, deck=deck
    )


@router.get("", response_model=DeckResponse)
async def get_deck(session: SessionDep) -> DeckResponse:
    return deck_response(session.snapshot())


@router.put("/name", response_model=DeckResponse)
async def rename_deck(body: RenameRequest, session: SessionDep) -> DeckResponse:
    session.rename(body.name)
    return deck_response(session.snapshot())


@router.put("/format", response_model=DeckResponse)
async def set_deck_format(body: FormatRequest, session: SessionDep) -> DeckResponse:
    """
    Change the deck format.

    Cards already in the deck are kept; check /deck/violations for
    entries the new format no longer allows.
    """
    session.set_format(body.format)
    return deck_response(session.snapshot())


@router.post("/cards/{card_id}", response_model=MutationResponse)
async def add_card(card_id: str, session: SessionDep) -> MutationResponse:
    return _mutation_response(session.add_card(card_id), session)


@router.delete("/cards/{card_id}", response_model=MutationResponse)
async def remove_card(card_id: str, session: SessionDep) -> MutationResponse:
    return _mutation_response(session.remove_card(card_id), session)


@router.post("/replace", response_model=MutationResponse)
async def replace_card(body: ReplaceRequest, session: SessionDep) -> MutationResponse:
    """Swap every copy of a card for another printing of it."""
    return _mutation_response(session.replace_card(body.old_id, body.new_id), session)


@router.delete("", response_model=DeckResponse)
async def clear_deck(session: SessionDep) -> DeckResponse:
    session.clear()
    return deck_response(session.snapshot())


@router.get("/stats", response_model=StatsResponse)
async def get_stats(session: SessionDep) -> StatsResponse:
    stats = session.current_stats()
    return StatsResponse(
        total_cards=stats.total_cards,
        total_cost=stats.total_cost,
        average_cost=round(stats.average_cost, 2),
        counts_by_type=dict(stats.counts_by_type),
        counts_by_edition=dict(stats.counts_by_edition),
        has_starter_gold=stats.has_starter_gold,
    )


@router.get("/variants/{base_id}", response_model=VariantResponse)
async def get_variant(base_id: str, session: SessionDep) -> VariantResponse:
    """Printing currently used for a canonical card (the card itself if none)."""
    return VariantResponse(base_id=base_id, card_id=session.current_variant(base_id))


@router.get("/violations", response_model=list[ViolationResponse])
async def get_violations(session: SessionDep) -> list[ViolationResponse]:
    return [
        ViolationResponse(card_id=v.card_id, reason=v.reason.value, detail=v.detail)
        for v in validate_deck(session.snapshot(), session.directory)
    ]


@router.get("/export", response_model=ExportResponse)
async def export_deck(
    session: SessionDep,
    export_format: Annotated[ExportFormat, Query(alias="format")] = "code",
) -> ExportResponse:
    """Export the deck as a deck code, a text deck list or a JSON record."""
    deck = session.snapshot()
    if export_format == "code":
        content = deck_code(deck)
    elif export_format == "text":
        content = deck_list_text(deck, session.directory, include_stats=True)
    else:
        content = deck_to_json(deck)
    return ExportResponse(format=export_format, content=content)


@router.post("/import", response_model=DeckResponse)
async def import_deck(body: ImportRequest, session: SessionDep) -> DeckResponse:
    """
    Replace the deck with an imported one.

    Deck codes keep the current name and format. Imported decks are not
    checked against the rules; see /deck/violations.
    """
    if body.format == "code":
        current = session.snapshot()
        deck = Deck.from_entries(
            parse_deck_code(body.content), name=current.name, deck_format=current.format
        )
    else:
        try:
            deck = deck_from_json(body.content)
        except DeckRecordError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e

    session.load(deck)
    return deck_response(session.snapshot())
