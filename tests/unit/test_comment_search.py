"""CommentSearch unit tests with fake readers."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from app.application.dtos.search import DateRange, SearchFilters, SearchOptions
from app.application.use_cases.search import CommentSearch
from app.domain.enums import ApprovalStatus, SearchSortBy
from tests.fakes import fake_comment_reader, fake_material_reader


def _dt(day: int) -> datetime:
    return datetime(2025, 4, day, tzinfo=timezone.utc)


class TestCommentSearch:
    async def test_matches_content_and_carries_material_context(
        self, make_material, make_comment
    ) -> None:
        material = make_material(
            id="m1", title="Database Systems", subject_code="DPP20023", programme_id="DBS"
        )
        comment = make_comment(id="c1", material_id="m1", content="great notes!")
        search = CommentSearch(fake_material_reader([material]), fake_comment_reader([comment]))
        page = await search.search("notes")
        assert page.total == 1
        hit = page.items[0]
        assert hit.comment.id == "c1"
        assert hit.material_title == "Database Systems"
        assert hit.subject_code == "DPP20023"
        assert hit.programme_id == "DBS"
        assert hit.relevance_score == 2
        assert hit.highlighted_fields["content"] == "great <mark>notes</mark>!"

    async def test_author_name_matches(self, make_material, make_comment) -> None:
        comments = [make_comment(id="c1", content="thanks", author_name="Siti Notes")]
        search = CommentSearch(fake_material_reader([make_material()]), fake_comment_reader(comments))
        page = await search.search("notes")
        assert [h.comment.id for h in page.items] == ["c1"]
        assert page.items[0].relevance_score == 1

    async def test_comments_on_unapproved_materials_are_ignored(
        self, make_material, make_comment
    ) -> None:
        materials = [
            make_material(id="ok"),
            make_material(id="pending", approval_status=ApprovalStatus.PENDING),
        ]
        comments = [
            make_comment(id="c-ok", material_id="ok", content="notes"),
            make_comment(id="c-pending", material_id="pending", content="notes"),
        ]
        comment_reader = fake_comment_reader(comments)
        search = CommentSearch(fake_material_reader(materials), comment_reader)
        page = await search.search("notes")
        assert [h.comment.id for h in page.items] == ["c-ok"]
        comment_reader.list_for_material.assert_awaited_once_with("ok")

    async def test_default_order_is_newest_first(self, make_material, make_comment) -> None:
        materials = [make_material(id="m1"), make_material(id="m2")]
        comments = [
            make_comment(id="old", material_id="m1", content="notes", created_at=_dt(1)),
            make_comment(id="new", material_id="m2", content="notes", created_at=_dt(9)),
            make_comment(id="mid", material_id="m1", content="notes", created_at=_dt(5)),
        ]
        search = CommentSearch(fake_material_reader(materials), fake_comment_reader(comments))
        page = await search.search("notes")
        assert [h.comment.id for h in page.items] == ["new", "mid", "old"]

    async def test_relevance_sort_when_requested(self, make_material, make_comment) -> None:
        comments = [
            make_comment(id="content-only", content="notes", author_name="A", created_at=_dt(9)),
            make_comment(id="both", content="notes", author_name="Notes", created_at=_dt(1)),
        ]
        search = CommentSearch(fake_material_reader([make_material()]), fake_comment_reader(comments))
        page = await search.search("notes", options=SearchOptions(sort_by=SearchSortBy.RELEVANCE))
        assert [h.comment.id for h in page.items] == ["both", "content-only"]

    async def test_material_id_restricts_search(self, make_material, make_comment) -> None:
        materials = [make_material(id="m1"), make_material(id="m2")]
        comments = [
            make_comment(id="c1", material_id="m1", content="notes"),
            make_comment(id="c2", material_id="m2", content="notes"),
        ]
        comment_reader = fake_comment_reader(comments)
        search = CommentSearch(fake_material_reader(materials), comment_reader)
        page = await search.search("notes", material_id="m2")
        assert [h.comment.id for h in page.items] == ["c2"]
        comment_reader.list_for_material.assert_awaited_once_with("m2")

    async def test_filters_and_date_range(self, make_material, make_comment) -> None:
        materials = [
            make_material(id="dbs", programme_id="DBS"),
            make_material(id="drm", programme_id="DRM"),
        ]
        comments = [
            make_comment(id="in", material_id="dbs", content="notes", created_at=_dt(5)),
            make_comment(id="late", material_id="dbs", content="notes", created_at=_dt(20)),
            make_comment(id="other", material_id="drm", content="notes", created_at=_dt(5)),
        ]
        search = CommentSearch(fake_material_reader(materials), fake_comment_reader(comments))
        filters = SearchFilters(programme_id="DBS", date_range=DateRange(end=_dt(10)))
        page = await search.search("notes", filters)
        assert [h.comment.id for h in page.items] == ["in"]

    async def test_one_failing_material_does_not_fail_search(
        self, make_material, make_comment
    ) -> None:
        materials = [make_material(id="bad"), make_material(id="good")]
        good = make_comment(id="c1", material_id="good", content="notes")

        async def list_for_material(material_id: str):
            if material_id == "bad":
                raise RuntimeError("timeout")
            return [good]

        comment_reader = AsyncMock()
        comment_reader.list_for_material = AsyncMock(side_effect=list_for_material)
        search = CommentSearch(fake_material_reader(materials), comment_reader)
        page = await search.search("notes")
        assert [h.comment.id for h in page.items] == ["c1"]

    async def test_material_fetch_failure_yields_empty_page(self) -> None:
        material_reader = AsyncMock()
        material_reader.list_materials = AsyncMock(side_effect=RuntimeError("down"))
        search = CommentSearch(material_reader, fake_comment_reader([]))
        page = await search.search("notes")
        assert page.items == []
        assert page.total == 0

    async def test_fetch_concurrency_is_bounded(self, make_material) -> None:
        materials = [make_material(id=f"m{i}") for i in range(10)]
        active = 0
        peak = 0

        async def list_for_material(material_id: str):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0)
            active -= 1
            return []

        comment_reader = AsyncMock()
        comment_reader.list_for_material = AsyncMock(side_effect=list_for_material)
        search = CommentSearch(
            fake_material_reader(materials), comment_reader, fetch_concurrency=3
        )
        await search.search("notes")
        assert comment_reader.list_for_material.await_count == 10
        assert peak <= 3

    async def test_pagination(self, make_material, make_comment) -> None:
        comments = [
            make_comment(id=f"c{i}", content="notes", created_at=_dt(i + 1)) for i in range(12)
        ]
        search = CommentSearch(fake_material_reader([make_material()]), fake_comment_reader(comments))
        page = await search.search("notes", options=SearchOptions(
            sort_by=SearchSortBy.DATE, limit=10, offset=15
        ))
        assert page.items == []
        assert page.total == 12
