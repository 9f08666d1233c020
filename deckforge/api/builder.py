"""
Deck builder endpoints.

Stateless wrappers around the validation engine: the UI sends the deck it
is editing and gets back the updated deck (or a refusal with the deck
unchanged).
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deckforge.api.dependencies import get_restriction_warnings, get_restrictions
from deckforge.api.schemas import CompositionPayload, StatsResponse, parse_card
from deckforge.models.deck import DeckSection, RejectCode
from deckforge.models.failure import ApiResponse, FailureKind
from deckforge.models.restriction import RestrictionTable
from deckforge.services.deck_builder import construction_warnings, remove, try_add
from deckforge.services.deck_stats import count_by_type, summarize

router = APIRouter(prefix="/builder", tags=["builder"])

REJECT_KINDS: dict[RejectCode, FailureKind] = {
    RejectCode.FORBIDDEN: FailureKind.FORBIDDEN,
    RejectCode.SECTION_FULL: FailureKind.SECTION_FULL,
    RejectCode.COPY_LIMIT: FailureKind.COPY_LIMIT,
}


class AddCardRequest(BaseModel):
    deck: CompositionPayload
    card: dict[str, Any]


class RemoveCardRequest(BaseModel):
    deck: CompositionPayload
    card: dict[str, Any]
    section: DeckSection


class BuilderState(BaseModel):
    """The deck after an edit, with its summary."""

    deck: CompositionPayload
    section: DeckSection | None = None
    stats: StatsResponse


class SummaryResponse(BaseModel):
    stats: StatsResponse
    extra_by_type: dict[str, int] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)


@router.post("/add", response_model=ApiResponse[BuilderState])
async def add_card(
    body: AddCardRequest,
    restrictions: Annotated[RestrictionTable, Depends(get_restrictions)],
    warnings: Annotated[list[str], Depends(get_restriction_warnings)],
) -> ApiResponse[Any]:
    """Add one copy of a card if the deck rules allow it."""
    composition = body.deck.to_composition()
    result = try_add(composition, parse_card(body.card), restrictions)
    state = BuilderState(
        deck=CompositionPayload.from_composition(result.composition),
        section=result.section,
        stats=StatsResponse.from_stats(summarize(result.composition)),
    )

    if result.reason is not None:
        response = ApiResponse.refusal(
            kind=REJECT_KINDS[result.reason.code],
            message=result.reason.message,
            data=state,
        )
        response.warnings = warnings
        return response

    return ApiResponse.success(state, warnings=warnings)


@router.post("/remove", response_model=ApiResponse[BuilderState])
async def remove_card(body: RemoveCardRequest) -> ApiResponse[Any]:
    """Remove the first copy of a card from a section (no-op if absent)."""
    composition = remove(body.deck.to_composition(), parse_card(body.card), body.section)
    return ApiResponse.success(
        BuilderState(
            deck=CompositionPayload.from_composition(composition),
            section=body.section,
            stats=StatsResponse.from_stats(summarize(composition)),
        )
    )


@router.post("/summary", response_model=SummaryResponse)
async def deck_summary(body: CompositionPayload) -> SummaryResponse:
    """Summary counts and size warnings for a deck."""
    composition = body.to_composition()
    return SummaryResponse(
        stats=StatsResponse.from_stats(summarize(composition)),
        extra_by_type=count_by_type(composition.extra),
        warnings=construction_warnings(composition),
    )
