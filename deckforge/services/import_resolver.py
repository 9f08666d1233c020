"""
Bulk deck import.

Turns pasted deck lists into catalog cards in two phases:

1. Parsing: text or identifier input becomes a list of ImportRequests.
   Text parsing never fails. Identifier parsing fails the job when the
   payload is neither a JSON list nor comma-separated text.
2. Resolving: requests are processed in fixed-size batches, one catalog
   query in flight at a time. An unmatched request is recorded as
   unresolved and never fails the job.
"""

import json
import logging
import re
from collections.abc import Iterator, Sequence
from typing import Any

from deckforge.catalog.client import CatalogQuery
from deckforge.config import MAX_MAIN_DECK, settings
from deckforge.models.card import Card
from deckforge.models.failure import CatalogError, MalformedImportError
from deckforge.models.importing import (
    ImportJobState,
    ImportMode,
    ImportOutcome,
    ImportRequest,
    ImportResult,
)

logger = logging.getLogger(__name__)

# Pattern: "3 Pot of Greed"
# Groups: (quantity, card_name)
QUANTITY_PATTERN = re.compile(r"^(\d+)\s+(.+)$")

COMMENT_PREFIXES = ("==", "//", "#")

# No card can appear more often than a full Main Deck
MAX_LINE_QUANTITY = MAX_MAIN_DECK


def parse_text_import(text: str) -> list[ImportRequest]:
    """
    Parse a "quantity name" deck list.

    Accepts:
        - "3 Pot of Greed" (three requests)
        - "Raigeki" (one request)

    Lines starting with "==", "//" or "#" are headers or comments and are
    skipped. Every other non-empty line becomes at least a literal name.
    Quantities above MAX_LINE_QUANTITY are capped.
    """
    requests: list[ImportRequest] = []

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        match = QUANTITY_PATTERN.match(line)
        if match:
            quantity = int(match.group(1))
            name = match.group(2).strip()
            if quantity > MAX_LINE_QUANTITY:
                logger.warning(
                    "Quantity %d for %r capped at %d", quantity, name, MAX_LINE_QUANTITY
                )
                quantity = MAX_LINE_QUANTITY
            requests.extend(ImportRequest(name=name) for _ in range(quantity))
        else:
            requests.append(ImportRequest(name=line))

    return requests


def parse_identifier_import(payload: str | Sequence[Any]) -> list[ImportRequest]:
    """
    Parse an identifier list.

    Accepts:
        - A JSON list (or Python list) whose first element is a header,
          e.g. '["Exported", "89631139", "89631139"]'
        - Comma-separated ids, e.g. "89631139, 46986414"

    Raises:
        MalformedImportError: If the payload is neither
    """
    identifiers: list[str]

    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError:
            if "," not in payload:
                raise MalformedImportError(detail="Not a JSON list and no commas found") from None
            identifiers = [part.strip() for part in payload.split(",")]
        else:
            if not isinstance(data, list):
                raise MalformedImportError(
                    detail=f"Expected a JSON list, got {type(data).__name__}"
                )
            identifiers = [str(item).strip() for item in data[1:]]
    elif isinstance(payload, Sequence):
        identifiers = [str(item).strip() for item in list(payload)[1:]]
    else:
        raise MalformedImportError(detail=f"Unsupported payload type {type(payload).__name__}")

    return [ImportRequest(identifier=identifier) for identifier in identifiers if identifier]


def batched(requests: Sequence[ImportRequest], size: int) -> Iterator[Sequence[ImportRequest]]:
    """Consecutive slices of at most `size` requests."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(requests), size):
        yield requests[start : start + size]


def pick_best_match(query: str, candidates: Sequence[Card]) -> Card | None:
    """
    Choose the catalog card a typed name most likely refers to.

    1. A case-insensitive exact name match wins.
    2. Otherwise, among cards whose name contains the query or is contained
       in it, the shortest name wins (first one on ties).
    3. Otherwise nothing matches.
    """
    needle = query.strip().lower()
    if not needle:
        return None

    for card in candidates:
        if card.name.lower() == needle:
            return card

    partial = [
        card for card in candidates if needle in card.name.lower() or card.name.lower() in needle
    ]
    if not partial:
        return None
    return min(partial, key=lambda card: len(card.name))


def outcome_message(outcome: ImportOutcome) -> str:
    """User-facing summary of an import job."""
    if outcome.state is ImportJobState.FAILED:
        return f"Error importing deck: {outcome.error}"
    if not outcome.resolved_cards:
        return "No cards were found. Check the imported format."
    message = f"Deck imported successfully! {len(outcome.resolved_cards)} cards found."
    if outcome.unresolved_tokens:
        message += f" Not found: {', '.join(dict.fromkeys(outcome.unresolved_tokens))}."
    return message


class ImportJob:
    """
    One run of the import pipeline.

    State moves PARSING -> RESOLVING -> DONE, or PARSING -> FAILED when an
    identifier payload is malformed.
    """

    def __init__(self, catalog: CatalogQuery, batch_size: int) -> None:
        self.catalog = catalog
        self.batch_size = batch_size
        self.state = ImportJobState.PARSING
        self.results: list[ImportResult] = []
        self.warnings: list[str] = []
        self._name_cache: dict[str, Card | None] = {}

    async def run(self, payload: str | Sequence[Any], mode: ImportMode) -> ImportOutcome:
        try:
            if mode is ImportMode.ID:
                requests = parse_identifier_import(payload)
            else:
                if not isinstance(payload, str):
                    payload = "\n".join(str(line) for line in payload)
                requests = parse_text_import(payload)
        except MalformedImportError as e:
            self.state = ImportJobState.FAILED
            logger.warning("Import failed while parsing: %s (%s)", e.message, e.detail)
            return ImportOutcome(state=self.state, error=e.message)

        self.state = ImportJobState.RESOLVING
        logger.info("Resolving %d import requests in %s mode", len(requests), mode.value)

        for number, batch in enumerate(batched(requests, self.batch_size), start=1):
            if mode is ImportMode.ID:
                await self._resolve_identifier_batch(batch)
            else:
                await self._resolve_name_batch(batch)
            logger.debug("Import batch %d resolved (%d requests)", number, len(batch))

        self.state = ImportJobState.DONE
        outcome = ImportOutcome(
            state=self.state,
            resolved_cards=[r.card for r in self.results if r.card is not None],
            unresolved_tokens=[r.request.token for r in self.results if r.card is None],
            warnings=self.warnings,
        )
        if outcome.unresolved_tokens:
            logger.warning(
                "Import finished with %d unresolved tokens", len(outcome.unresolved_tokens)
            )
        return outcome

    async def _resolve_identifier_batch(self, batch: Sequence[ImportRequest]) -> None:
        ids = list(dict.fromkeys(request.token for request in batch))
        try:
            cards = await self.catalog.fetch_by_ids(ids)
        except CatalogError as e:
            logger.warning("Identifier lookup failed for %d ids: %s", len(ids), e.detail)
            self.warnings.append(f"Card lookup failed for ids {', '.join(ids)}")
            cards = []

        # Alternate artworks carry their own ids but resolve to the same card
        by_id: dict[str, Card] = {}
        for card in cards:
            by_id.setdefault(str(card.id), card)
            for image in card.images:
                by_id.setdefault(str(image.id), card)

        for request in batch:
            self.results.append(ImportResult(request=request, card=by_id.get(request.token)))

    async def _resolve_name_batch(self, batch: Sequence[ImportRequest]) -> None:
        for request in batch:
            name = request.token
            key = name.strip().lower()
            if key not in self._name_cache:
                self._name_cache[key] = await self._lookup_name(name)
            self.results.append(ImportResult(request=request, card=self._name_cache[key]))

    async def _lookup_name(self, name: str) -> Card | None:
        try:
            candidates = await self.catalog.fetch_by_name(name)
        except CatalogError as e:
            logger.warning("Name lookup failed for %r: %s", name, e.detail)
            self.warnings.append(f'Card lookup failed for "{name}"')
            return None
        return pick_best_match(name, candidates)


class ImportResolver:
    """Entry point for bulk imports against a catalog."""

    def __init__(self, catalog: CatalogQuery, batch_size: int | None = None) -> None:
        self.catalog = catalog
        self.batch_size = batch_size or settings.import_batch_size

    async def run(self, payload: str | Sequence[Any], mode: ImportMode) -> ImportOutcome:
        """Parse and resolve one import, returning its final outcome."""
        job = ImportJob(self.catalog, self.batch_size)
        return await job.run(payload, mode)
