"""Subject search: subject reference data scored by name, code, and description."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.application.dtos.search import (
    SearchFilters,
    SearchOptions,
    SearchPage,
    SubjectSearchResult,
)
from app.application.services.relevance import SUBJECT_FIELD_WEIGHTS, RelevanceScorer
from app.application.use_cases.search.paging import SortKeys, paginate, sort_hits
from app.domain.enums import SearchSortBy
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IMaterialReader, ISubjectReader
    from app.domain.entities import Subject

logger = logging.getLogger(__name__)

_SORT_KEYS: SortKeys = {
    SearchSortBy.RELEVANCE: lambda pair: pair[1].score,
    SearchSortBy.TITLE: lambda pair: pair[0].subject_name.casefold(),
}


class SubjectSearch:
    """Search subjects; attach the approved-material count to each returned subject."""

    def __init__(
        self,
        subject_reader: "ISubjectReader",
        material_reader: "IMaterialReader",
        scorer: RelevanceScorer | None = None,
        max_limit: int = 100,
    ) -> None:
        self.subject_reader = subject_reader
        self.material_reader = material_reader
        self.scorer = scorer or RelevanceScorer()
        self.max_limit = max_limit

    @traced("search.subjects")
    async def search(
        self,
        term: str,
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
    ) -> SearchPage[SubjectSearchResult]:
        """Return one page of matching subjects; never raises.

        An empty term returns an empty page. Only programme_id and semester
        apply to subjects. material_count is computed for returned subjects
        only and does not affect ordering.
        """
        filters = filters or SearchFilters()
        options = (options or SearchOptions()).clamped(self.max_limit)
        needle = (term or "").strip()
        if not needle:
            return SearchPage.empty()
        try:
            subjects = await self.subject_reader.list_subjects(
                programme_id=filters.programme_id,
                semester=filters.semester,
            )
            scored = []
            for subject in subjects:
                result = self.scorer.score(subject, needle, SUBJECT_FIELD_WEIGHTS)
                if result.score > 0:
                    scored.append((subject, result))
            scored = sort_hits(scored, options.sort_by, options.sort_order, _SORT_KEYS)
            page = paginate(scored, options.offset, options.limit)

            counts = await asyncio.gather(*(self._material_count(s) for s, _ in page))
            items = [
                SubjectSearchResult(
                    id=subject.id,
                    subject_code=subject.subject_code,
                    subject_name=subject.subject_name,
                    programme_id=subject.programme_id,
                    semester=subject.semester,
                    material_count=count,
                    description=subject.description,
                    relevance_score=result.score,
                    highlighted_fields=result.highlights,
                )
                for (subject, result), count in zip(page, counts)
            ]
            return SearchPage(items=items, total=len(scored))
        except Exception:
            logger.exception("Subject search failed for term %r", term)
            return SearchPage.empty()

    async def _material_count(self, subject: "Subject") -> int:
        return await self.material_reader.count_approved(
            subject.subject_code, subject.programme_id
        )
