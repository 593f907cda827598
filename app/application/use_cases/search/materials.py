"""Material search: approved materials, weighted relevance, sort and paginate."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.search import MaterialHit, SearchFilters, SearchOptions, SearchPage
from app.application.interfaces.repositories import MaterialCriteria
from app.application.services.relevance import MATERIAL_FIELD_WEIGHTS, RelevanceScorer
from app.application.use_cases.search.paging import SortKeys, paginate, sort_hits
from app.domain.enums import ApprovalStatus, SearchSortBy
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import EPOCH_UTC

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IMaterialReader

logger = logging.getLogger(__name__)

_SORT_KEYS: SortKeys = {
    SearchSortBy.RELEVANCE: lambda h: h.relevance_score,
    SearchSortBy.DATE: lambda h: h.material.upload_date or EPOCH_UTC,
    SearchSortBy.TITLE: lambda h: h.material.title.casefold(),
    SearchSortBy.DOWNLOADS: lambda h: h.material.download_count,
}


def material_criteria(filters: SearchFilters) -> MaterialCriteria:
    """Structural predicates for the material fetch; approval is always required."""
    return MaterialCriteria(
        approval_status=ApprovalStatus.APPROVED,
        programme_id=filters.programme_id,
        semester=filters.semester,
        subject_code=filters.subject_code,
        material_type=filters.material_type,
        uploader_id=filters.uploader_id,
    )


class MaterialSearch:
    """Search approved materials by title, description, subject, uploader, and type."""

    def __init__(
        self,
        material_reader: "IMaterialReader",
        scorer: RelevanceScorer | None = None,
        max_limit: int = 100,
    ) -> None:
        self.material_reader = material_reader
        self.scorer = scorer or RelevanceScorer()
        self.max_limit = max_limit

    @traced("search.materials")
    async def search(
        self,
        term: str,
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
    ) -> SearchPage[MaterialHit]:
        """Return one page of matching materials; never raises.

        An empty term skips scoring and returns every candidate (score 0);
        non-relevance sorts are still applied. Fetch errors are logged and
        yield an empty page.
        """
        filters = filters or SearchFilters()
        options = (options or SearchOptions()).clamped(self.max_limit)
        try:
            candidates = await self.material_reader.list_materials(material_criteria(filters))
            candidates = [m for m in candidates if m.is_approved()]
            if filters.date_range is not None:
                candidates = [
                    m for m in candidates if filters.date_range.contains(m.upload_date)
                ]

            needle = (term or "").strip()
            if needle:
                hits: list[MaterialHit] = []
                for material in candidates:
                    result = self.scorer.score(material, needle, MATERIAL_FIELD_WEIGHTS)
                    if result.score > 0:
                        hits.append(
                            MaterialHit(
                                material=material,
                                relevance_score=result.score,
                                highlighted_fields=result.highlights,
                            )
                        )
                hits = sort_hits(hits, options.sort_by, options.sort_order, _SORT_KEYS)
            else:
                hits = [MaterialHit(material=m) for m in candidates]
                if options.sort_by != SearchSortBy.RELEVANCE:
                    hits = sort_hits(hits, options.sort_by, options.sort_order, _SORT_KEYS)

            logger.debug(
                "Material search %r: %s candidates, %s hits", needle, len(candidates), len(hits)
            )
            return SearchPage(
                items=paginate(hits, options.offset, options.limit),
                total=len(hits),
            )
        except Exception:
            logger.exception("Material search failed for term %r", term)
            return SearchPage.empty()
