"""Application DTOs: search filters, options, hits, and result envelopes."""

from app.application.dtos.search import (
    CommentHit,
    DateRange,
    MaterialHit,
    SearchFilters,
    SearchOptions,
    SearchPage,
    SearchResult,
    SearchResults,
    SubjectSearchResult,
)

__all__ = [
    "CommentHit",
    "DateRange",
    "MaterialHit",
    "SearchFilters",
    "SearchOptions",
    "SearchPage",
    "SearchResult",
    "SearchResults",
    "SubjectSearchResult",
]
