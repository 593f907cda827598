"""Search orchestration: combined search, per-entity entry points, and suggestions."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.application.dtos.search import (
    CommentHit,
    MaterialHit,
    SearchFilters,
    SearchOptions,
    SearchPage,
    SearchResults,
    SubjectSearchResult,
)
from app.application.services.relevance import RelevanceScorer
from app.application.use_cases.search.comments import CommentSearch
from app.application.use_cases.search.mappers import comment_to_result, material_to_result
from app.application.use_cases.search.materials import MaterialSearch
from app.application.use_cases.search.subjects import SubjectSearch
from app.domain.enums import SearchSortBy, SearchSortOrder
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        ICommentReader,
        IMaterialReader,
        ISubjectReader,
    )

logger = logging.getLogger(__name__)

# Attributes of a material that feed suggestions, in output order.
_SUGGESTION_FIELDS = ("title", "subject_name", "uploader_name")


class SearchService:
    """Cross-entity search over materials, comments, and subjects.

    Stateless and read-only: every call derives its result from its inputs
    and the store contents at fetch time. No method raises; failures degrade
    to empty results.
    """

    def __init__(
        self,
        material_reader: "IMaterialReader",
        comment_reader: "ICommentReader",
        subject_reader: "ISubjectReader",
        scorer: RelevanceScorer | None = None,
        *,
        default_limit: int = 20,
        max_limit: int = 100,
        comment_fetch_concurrency: int = 8,
        suggestion_min_length: int = 2,
        suggestion_pool_size: int = 50,
    ) -> None:
        scorer = scorer or RelevanceScorer()
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.suggestion_min_length = suggestion_min_length
        self.suggestion_pool_size = suggestion_pool_size
        self.materials = MaterialSearch(material_reader, scorer, max_limit=max_limit)
        self.comments = CommentSearch(
            material_reader,
            comment_reader,
            scorer,
            max_limit=max_limit,
            fetch_concurrency=comment_fetch_concurrency,
        )
        self.subjects = SubjectSearch(subject_reader, material_reader, scorer, max_limit=max_limit)

    async def search_materials(
        self,
        term: str,
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
    ) -> SearchPage[MaterialHit]:
        return await self.materials.search(term, filters, options or self._default_options())

    async def search_comments(
        self,
        term: str,
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
        material_id: str | None = None,
    ) -> SearchPage[CommentHit]:
        if options is None:
            options = SearchOptions(
                sort_by=SearchSortBy.DATE,
                sort_order=SearchSortOrder.DESC,
                limit=self.default_limit,
            )
        return await self.comments.search(term, filters, options, material_id=material_id)

    async def search_subjects(
        self,
        term: str,
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
    ) -> SearchPage[SubjectSearchResult]:
        return await self.subjects.search(term, filters, options or self._default_options())

    @traced("search.search_all")
    async def search_all(
        self,
        term: str,
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
    ) -> SearchResults:
        """Search all three entity kinds concurrently and rank materials with comments.

        materials and comments keep their own entity ordering; results holds
        both kinds re-sorted by envelope relevance_score (descending, stable)
        and truncated to limit. Comments carry a flat envelope score of 1, so
        they rank below every positively scored material. has_more is True
        when any entity total exceeds limit. Subjects never enter results.
        """
        filters = filters or SearchFilters()
        try:
            options = (options or self._default_options()).clamped(self.max_limit)
            limit = options.limit
            material_page, comment_page, subject_page = await asyncio.gather(
                self.materials.search(
                    term,
                    filters,
                    SearchOptions(
                        sort_by=options.sort_by,
                        sort_order=options.sort_order,
                        limit=limit,
                        offset=options.offset,
                    ),
                ),
                self.comments.search(
                    term,
                    filters,
                    SearchOptions(
                        sort_by=SearchSortBy.DATE,
                        sort_order=SearchSortOrder.DESC,
                        limit=limit,
                        offset=options.offset,
                    ),
                ),
                self.subjects.search(
                    term,
                    filters,
                    SearchOptions(limit=limit, offset=options.offset),
                ),
            )

            materials = [material_to_result(hit) for hit in material_page.items]
            comments = [comment_to_result(hit) for hit in comment_page.items]
            combined = sorted(
                materials + comments,
                key=lambda r: r.relevance_score,
                reverse=True,
            )[:limit]
            has_more = any(
                total > limit
                for total in (material_page.total, comment_page.total, subject_page.total)
            )
            add_span_attributes(
                total_materials=material_page.total,
                total_comments=comment_page.total,
                total_subjects=subject_page.total,
            )
            return SearchResults(
                materials=materials,
                comments=comments,
                subjects=subject_page.items,
                results=combined,
                total_materials=material_page.total,
                total_comments=comment_page.total,
                total_subjects=subject_page.total,
                search_query=term,
                filters=filters,
                has_more=has_more,
            )
        except Exception:
            logger.exception("Combined search failed for query %r", term)
            return SearchResults.empty(term, filters)

    async def get_search_suggestions(self, term: str, limit: int = 5) -> list[str]:
        """Return up to limit unique suggestions drawn from matching approved materials.

        limit is split evenly (floor of limit / 3) between titles, subject
        names, and uploader names, in that order. A value already suggested
        by an earlier category is not repeated. Terms shorter than
        suggestion_min_length yield [].
        """
        needle = (term or "").strip()
        if len(needle) < self.suggestion_min_length or limit <= 0:
            return []
        try:
            page = await self.materials.search(
                needle,
                SearchFilters(),
                SearchOptions(limit=self.suggestion_pool_size),
            )
            per_field = limit // 3
            suggestions: list[str] = []
            seen: set[str] = set()
            for attr in _SUGGESTION_FIELDS:
                taken = 0
                for hit in page.items:
                    if taken >= per_field:
                        break
                    value = getattr(hit.material, attr)
                    if not value or value in seen:
                        continue
                    seen.add(value)
                    suggestions.append(value)
                    taken += 1
            return suggestions[:limit]
        except Exception:
            logger.exception("Search suggestions failed for %r", term)
            return []

    def _default_options(self) -> SearchOptions:
        return SearchOptions(limit=self.default_limit)
