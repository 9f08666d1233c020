"""
Saved deck endpoints.

List, read, save, delete and duplicate decks, plus bulk import from a
pasted deck list.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from deckforge.api.dependencies import get_catalog
from deckforge.api.schemas import (
    CompositionPayload,
    DeckListResponse,
    DeckResponse,
)
from deckforge.catalog.client import CatalogQuery
from deckforge.db import delete_deck, duplicate_deck, get_deck, list_decks, save_deck
from deckforge.db.database import get_session
from deckforge.models.deck import DeckComposition, SavedDeckDocument
from deckforge.models.failure import ApiResponse, DeckNotFoundError, FailureKind, KnownError
from deckforge.models.importing import ImportJobState, ImportMode
from deckforge.services.deck_builder import to_document
from deckforge.services.import_resolver import ImportResolver, outcome_message

router = APIRouter(prefix="/decks", tags=["decks"])


class ImportRequestBody(BaseModel):
    """A pasted deck list to import as a new deck."""

    name: str
    payload: str | list[Any]
    mode: ImportMode = ImportMode.TEXT
    description: str = ""


class ImportResponse(BaseModel):
    deck: DeckResponse | None = None
    message: str
    resolved_count: int = 0
    unresolved_tokens: list[str] = Field(default_factory=list)


def _not_found(deck_id: str) -> HTTPException:
    error = DeckNotFoundError(deck_id)
    return HTTPException(status_code=error.status_code, detail=error.message)


async def _load_or_404(session: AsyncSession, deck_id: str) -> SavedDeckDocument:
    document = await get_deck(session, deck_id)
    if document is None:
        raise _not_found(deck_id)
    return document


@router.get("", response_model=DeckListResponse)
async def get_all_decks(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckListResponse:
    """All saved decks, oldest first."""
    documents = await list_decks(session)
    decks = [DeckResponse.from_document(d) for d in documents]
    return DeckListResponse(decks=decks, count=len(decks))


@router.get("/{deck_id}", response_model=DeckResponse)
async def get_deck_by_id(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """A single saved deck. Returns 404 if it does not exist."""
    return DeckResponse.from_document(await _load_or_404(session, deck_id))


@router.post("", response_model=DeckResponse)
async def save_composition(
    body: CompositionPayload,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Save the deck being edited.

    A payload with `deck_id` updates that deck, otherwise a new one is created.
    """
    created_at = None
    if body.deck_id:
        existing = await get_deck(session, body.deck_id)
        created_at = existing.created_at if existing else None

    document = to_document(body.to_composition(), created_at=created_at)
    try:
        saved = await save_deck(session, document)
    except KnownError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return DeckResponse.from_document(saved)


@router.delete("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_deck(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> None:
    """Delete a saved deck. Returns 404 if it does not exist."""
    if not await delete_deck(session, deck_id):
        raise _not_found(deck_id)


@router.post("/{deck_id}/duplicate", response_model=DeckResponse)
async def copy_deck(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """Save a copy of a deck under a new id."""
    copy = await duplicate_deck(session, deck_id)
    if copy is None:
        raise _not_found(deck_id)
    return DeckResponse.from_document(copy)


@router.post("/import", response_model=ApiResponse[ImportResponse])
async def import_deck(
    body: ImportRequestBody,
    session: Annotated[AsyncSession, Depends(get_session)],
    catalog: Annotated[CatalogQuery, Depends(get_catalog)],
) -> ApiResponse[Any]:
    """
    Import a deck list and save it as a new deck.

    Nothing is saved when no card resolves. Unresolved entries are listed
    as warnings on a partial success.
    """
    if not body.name.strip():
        return ApiResponse.known_failure(
            kind=FailureKind.INVALID_INPUT,
            message="Please give your deck a name.",
        )
    if isinstance(body.payload, str) and not body.payload.strip():
        return ApiResponse.known_failure(
            kind=FailureKind.INVALID_INPUT,
            message="Please paste the card list.",
        )

    outcome = await ImportResolver(catalog).run(body.payload, body.mode)
    message = outcome_message(outcome)

    if outcome.state is ImportJobState.FAILED:
        return ApiResponse.known_failure(
            kind=FailureKind.MALFORMED_IMPORT,
            message=message,
            warnings=outcome.warnings,
        )
    if not outcome.succeeded:
        return ApiResponse.known_failure(
            kind=FailureKind.NOTHING_IMPORTED,
            message=message,
            detail=", ".join(outcome.unresolved_tokens) or None,
            warnings=outcome.warnings,
        )

    # Imported cards are saved as resolved; size and copy rules are checked
    # when the deck is opened in the builder
    document = to_document(DeckComposition(name=body.name, description=body.description))
    document.cards = list(outcome.resolved_cards)
    saved = await save_deck(session, document)

    data = ImportResponse(
        deck=DeckResponse.from_document(saved),
        message=message,
        resolved_count=len(outcome.resolved_cards),
        unresolved_tokens=outcome.unresolved_tokens,
    )
    if outcome.is_partial:
        warnings = [f'Card not found: "{token}"' for token in outcome.unresolved_tokens]
        return ApiResponse.partial_success(data, warnings=warnings + outcome.warnings)
    return ApiResponse.success(data, warnings=outcome.warnings)
