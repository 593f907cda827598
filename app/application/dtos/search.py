"""DTOs for cross-entity search (filters, options, hits, and result envelopes)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from app.domain.entities import Comment, Material
from app.domain.enums import MaterialType, SearchResultType, SearchSortBy, SearchSortOrder
from app.shared.utils.datetime import ensure_utc

T = TypeVar("T")


@dataclass(frozen=True)
class DateRange:
    """Inclusive date bounds; either side may be open (None)."""

    start: datetime | None = None
    end: datetime | None = None

    def contains(self, value: datetime | None) -> bool:
        """Return whether value falls within the range. Undated records never match a bounded range."""
        if self.start is None and self.end is None:
            return True
        if value is None:
            return False
        value = ensure_utc(value)
        if self.start is not None and value < ensure_utc(self.start):
            return False
        if self.end is not None and value > ensure_utc(self.end):
            return False
        return True


@dataclass(frozen=True)
class SearchFilters:
    """Structural (AND) filters applied before any text scoring. All optional."""

    programme_id: str | None = None
    subject_code: str | None = None
    material_type: MaterialType | None = None
    semester: int | None = None
    uploader_id: str | None = None
    date_range: DateRange | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return only the filters that are set (for echoing back to callers)."""
        out: dict[str, Any] = {}
        if self.programme_id is not None:
            out["programme_id"] = self.programme_id
        if self.subject_code is not None:
            out["subject_code"] = self.subject_code
        if self.material_type is not None:
            out["material_type"] = self.material_type.value
        if self.semester is not None:
            out["semester"] = self.semester
        if self.uploader_id is not None:
            out["uploader_id"] = self.uploader_id
        if self.date_range is not None:
            out["date_range"] = {
                "start": self.date_range.start,
                "end": self.date_range.end,
            }
        return out


@dataclass(frozen=True)
class SearchOptions:
    """Sort and pagination options shared by every entity search."""

    sort_by: SearchSortBy = SearchSortBy.RELEVANCE
    sort_order: SearchSortOrder = SearchSortOrder.DESC
    limit: int = 20
    offset: int = 0

    def clamped(self, max_limit: int) -> SearchOptions:
        """Return a copy with limit in [0, max_limit] and offset >= 0."""
        return SearchOptions(
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            limit=min(max(0, self.limit), max_limit),
            offset=max(0, self.offset),
        )


@dataclass(frozen=True)
class MaterialHit:
    """Approved material with its relevance score and highlighted fields."""

    material: Material
    relevance_score: int = 0
    highlighted_fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CommentHit:
    """Comment plus the parent material context it was found under."""

    comment: Comment
    material_title: str
    subject_code: str
    programme_id: str
    relevance_score: int = 0
    highlighted_fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SubjectSearchResult:
    """Matching subject with the number of approved materials filed under it.

    material_count is informational only; it takes no part in scoring or sorting.
    """

    id: str
    subject_code: str
    subject_name: str
    programme_id: str
    semester: int
    material_count: int
    description: str | None = None
    relevance_score: int = 0
    highlighted_fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchPage(Generic[T]):
    """One page of entity results. total is the post-filter, pre-pagination size."""

    items: list[T]
    total: int

    @classmethod
    def empty(cls) -> SearchPage[T]:
        return cls(items=[], total=0)


@dataclass(frozen=True)
class SearchResult:
    """Unified envelope used to rank materials and comments together."""

    id: str
    type: SearchResultType
    title: str
    snippet: str
    relevance_score: int
    description: str | None = None
    programme_id: str | None = None
    subject_code: str | None = None
    material_id: str | None = None
    comment_id: str | None = None
    author_name: str | None = None
    created_at: datetime | None = None
    # Material-only file metadata
    material_type: MaterialType | None = None
    file_name: str | None = None
    file_size: int | None = None
    file_type: str | None = None
    download_url: str | None = None


@dataclass(frozen=True)
class SearchResults:
    """Top-level response of search_all."""

    materials: list[SearchResult]
    comments: list[SearchResult]
    subjects: list[SubjectSearchResult]
    results: list[SearchResult]
    total_materials: int
    total_comments: int
    total_subjects: int
    search_query: str
    filters: SearchFilters
    has_more: bool

    @classmethod
    def empty(cls, search_query: str, filters: SearchFilters) -> SearchResults:
        """All-empty envelope echoing the query and filters."""
        return cls(
            materials=[],
            comments=[],
            subjects=[],
            results=[],
            total_materials=0,
            total_comments=0,
            total_subjects=0,
            search_query=search_query,
            filters=filters,
            has_more=False,
        )
