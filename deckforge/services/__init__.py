"""
DeckForge services.

Deck validation, statistics, bulk import and catalog-backed search.
"""

from deckforge.services.card_search import SearchResponse, SearchSequencer, run_search
from deckforge.services.classifier import classify, is_extra_deck_card, split_sections
from deckforge.services.deck_builder import (
    add_many,
    clear,
    construction_warnings,
    hydrate,
    remove,
    thumbnail_candidates,
    thumbnail_for,
    to_document,
    try_add,
)
from deckforge.services.deck_session import DeckSession
from deckforge.services.deck_stats import count_by_type, group_by_type, summarize
from deckforge.services.import_resolver import (
    ImportJob,
    ImportResolver,
    outcome_message,
    parse_identifier_import,
    parse_text_import,
    pick_best_match,
)
from deckforge.services.restrictions import RestrictionLoad, load_restriction_table

__all__ = [
    # Classifier
    "classify",
    "is_extra_deck_card",
    "split_sections",
    # Validation engine
    "add_many",
    "clear",
    "construction_warnings",
    "hydrate",
    "remove",
    "thumbnail_candidates",
    "thumbnail_for",
    "to_document",
    "try_add",
    "DeckSession",
    # Stats
    "count_by_type",
    "group_by_type",
    "summarize",
    # Import
    "ImportJob",
    "ImportResolver",
    "outcome_message",
    "parse_identifier_import",
    "parse_text_import",
    "pick_best_match",
    # Restrictions
    "RestrictionLoad",
    "load_restriction_table",
    # Search
    "SearchResponse",
    "SearchSequencer",
    "run_search",
]
