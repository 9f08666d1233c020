"""
Restriction table: per-card copy caps derived from a restriction list.

Forbidden -> 0, Limited -> 1, Semi-Limited -> 2, anything else -> 3.
A table is built once per session and read-only afterwards.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from deckforge.config import DEFAULT_COPY_CAP


class RestrictionStatus(str, Enum):
    """Restriction levels as the catalog names them."""

    FORBIDDEN = "Forbidden"
    LIMITED = "Limited"
    SEMI_LIMITED = "Semi-Limited"


STATUS_CAPS: dict[RestrictionStatus, int] = {
    RestrictionStatus.FORBIDDEN: 0,
    RestrictionStatus.LIMITED: 1,
    RestrictionStatus.SEMI_LIMITED: 2,
}


@dataclass(frozen=True, slots=True)
class RestrictionEntry:
    """One line of a restriction list. `status` None means unrestricted."""

    card_id: int
    status: str | None = None


@dataclass(frozen=True)
class RestrictionTable:
    """
    Snapshot of copy caps keyed by card id.

    Only restricted cards are stored; unknown ids default to DEFAULT_COPY_CAP.
    """

    caps: Mapping[int, int] = field(default_factory=lambda: MappingProxyType({}))

    def cap_for(self, card_id: int) -> int:
        return self.caps.get(card_id, DEFAULT_COPY_CAP)

    def __len__(self) -> int:
        return len(self.caps)


# The permissive table used when no restriction list could be fetched
UNRESTRICTED = RestrictionTable()


def cap_for_status(status: str | None) -> int:
    """Map a restriction status string to a copy cap."""
    if status is None:
        return DEFAULT_COPY_CAP
    try:
        return STATUS_CAPS[RestrictionStatus(status)]
    except ValueError:
        return DEFAULT_COPY_CAP


def build_restriction_table(entries: Iterable[RestrictionEntry]) -> RestrictionTable:
    """
    Build a table from (card_id, status) entries.

    A card listed more than once keeps its strictest cap.
    """
    caps: dict[int, int] = {}
    for entry in entries:
        cap = cap_for_status(entry.status)
        if cap == DEFAULT_COPY_CAP:
            continue
        caps[entry.card_id] = min(cap, caps.get(entry.card_id, DEFAULT_COPY_CAP))
    return RestrictionTable(caps=MappingProxyType(caps))


def cap_for(table: RestrictionTable, card_id: int) -> int:
    """Copy cap for a card id, defaulting to 3 for unknown ids."""
    return table.cap_for(card_id)
