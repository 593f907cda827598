"""Comment search: comments under qualifying approved materials, scored per field."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from app.application.dtos.search import CommentHit, SearchFilters, SearchOptions, SearchPage
from app.application.interfaces.repositories import MaterialCriteria
from app.application.services.relevance import COMMENT_FIELD_WEIGHTS, RelevanceScorer
from app.application.use_cases.search.paging import SortKeys, paginate, sort_hits
from app.domain.enums import ApprovalStatus, SearchSortBy, SearchSortOrder
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import EPOCH_UTC

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ICommentReader, IMaterialReader
    from app.domain.entities import Material

logger = logging.getLogger(__name__)

# Comments default to newest first.
DEFAULT_COMMENT_OPTIONS = SearchOptions(
    sort_by=SearchSortBy.DATE, sort_order=SearchSortOrder.DESC
)

_SORT_KEYS: SortKeys = {
    SearchSortBy.RELEVANCE: lambda h: h.relevance_score,
    SearchSortBy.DATE: lambda h: h.comment.created_at or EPOCH_UTC,
    SearchSortBy.TITLE: lambda h: h.comment.content.casefold(),
}


class CommentSearch:
    """Search comment content and author names across approved materials.

    Comments are loaded per qualifying material (no global comment index),
    so cost grows with materials x comments-per-material.
    """

    def __init__(
        self,
        material_reader: "IMaterialReader",
        comment_reader: "ICommentReader",
        scorer: RelevanceScorer | None = None,
        max_limit: int = 100,
        fetch_concurrency: int = 8,
    ) -> None:
        self.material_reader = material_reader
        self.comment_reader = comment_reader
        self.scorer = scorer or RelevanceScorer()
        self.max_limit = max_limit
        self.fetch_concurrency = max(1, fetch_concurrency)

    @traced("search.comments")
    async def search(
        self,
        term: str,
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
        material_id: str | None = None,
    ) -> SearchPage[CommentHit]:
        """Return one page of matching comments; never raises.

        Only programme_id, subject_code and date_range apply to comments.
        material_id narrows the search to a single material.
        """
        filters = filters or SearchFilters()
        options = (options or DEFAULT_COMMENT_OPTIONS).clamped(self.max_limit)
        try:
            materials = await self.material_reader.list_materials(
                MaterialCriteria(
                    approval_status=ApprovalStatus.APPROVED,
                    programme_id=filters.programme_id,
                    subject_code=filters.subject_code,
                )
            )
            materials = [m for m in materials if m.is_approved()]
            if material_id is not None:
                materials = [m for m in materials if m.id == material_id]

            candidates = await self._load_comments(materials)
            if filters.date_range is not None:
                candidates = [
                    h for h in candidates if filters.date_range.contains(h.comment.created_at)
                ]

            needle = (term or "").strip()
            if needle:
                hits: list[CommentHit] = []
                for hit in candidates:
                    result = self.scorer.score(hit.comment, needle, COMMENT_FIELD_WEIGHTS)
                    if result.score > 0:
                        hits.append(
                            replace(
                                hit,
                                relevance_score=result.score,
                                highlighted_fields=result.highlights,
                            )
                        )
                hits = sort_hits(hits, options.sort_by, options.sort_order, _SORT_KEYS)
            else:
                hits = candidates
                if options.sort_by != SearchSortBy.RELEVANCE:
                    hits = sort_hits(hits, options.sort_by, options.sort_order, _SORT_KEYS)

            logger.debug(
                "Comment search %r: %s materials, %s comments, %s hits",
                needle,
                len(materials),
                len(candidates),
                len(hits),
            )
            return SearchPage(
                items=paginate(hits, options.offset, options.limit),
                total=len(hits),
            )
        except Exception:
            logger.exception("Comment search failed for term %r", term)
            return SearchPage.empty()

    async def _load_comments(self, materials: list["Material"]) -> list[CommentHit]:
        """Fetch comments for each material concurrently; keep material order in the result."""
        semaphore = asyncio.Semaphore(self.fetch_concurrency)

        async def load(material: "Material") -> list[CommentHit]:
            async with semaphore:
                try:
                    comments = await self.comment_reader.list_for_material(material.id)
                except Exception:
                    logger.warning(
                        "Skipping comments of material %s: load failed",
                        material.id,
                        exc_info=True,
                    )
                    return []
            return [
                CommentHit(
                    comment=comment,
                    material_title=material.title,
                    subject_code=material.subject_code,
                    programme_id=material.programme_id,
                )
                for comment in comments
            ]

        batches = await asyncio.gather(*(load(m) for m in materials))
        return [hit for batch in batches for hit in batch]
