"""API tests for /api/v1/search.

The search service dependency is overridden with one built on in-memory
readers, so these tests exercise routing, query parsing, response schemas,
and error mapping without Firestore.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import get_search_service
from app.application.use_cases.search import SearchService
from app.core.exception_handlers import _generic_exception_handler
from app.domain.enums import MaterialType
from app.main import app
from tests.fakes import fake_comment_reader, fake_material_reader, fake_subject_reader

SEARCH = "/api/v1/search"


@pytest.fixture
def search_service(make_material, make_comment, make_subject) -> SearchService:
    materials = [
        make_material(
            id="m1",
            title="Calculus notes",
            description="Limits and derivatives",
            subject_name="MATHEMATICS",
            uploader_name="Aisha",
            upload_date=datetime(2025, 1, 10, tzinfo=timezone.utc),
            download_count=4,
        ),
        make_material(
            id="m2",
            title="Physics past paper",
            description="Includes calculus questions",
            material_type=MaterialType.EXAM_PAPER,
            subject_code="PHY10001",
            subject_name="PHYSICS",
            uploader_name="Ben",
            upload_date=datetime(2025, 3, 5, tzinfo=timezone.utc),
        ),
    ]
    comments = [
        make_comment(id="c1", material_id="m1", content="Great calculus summary", author_name="Chen"),
        make_comment(id="c2", material_id="m2", content="Missing page 3", author_name="Dana"),
    ]
    subjects = [
        make_subject(id="MAT10001", subject_code="MAT10001", subject_name="MATHEMATICS"),
        make_subject(id="PHY10001", subject_code="PHY10001", subject_name="PHYSICS"),
    ]
    return SearchService(
        fake_material_reader(materials),
        fake_comment_reader(comments),
        fake_subject_reader(subjects),
    )


@pytest.fixture
def override_search(search_service: SearchService) -> SearchService:
    app.dependency_overrides[get_search_service] = lambda: search_service
    return search_service


class TestSearchAll:
    async def test_ranks_materials_above_comments(
        self, client: AsyncClient, override_search: SearchService
    ) -> None:
        """Merged results are ordered by relevance; comments carry a flat score of 1."""
        response = await client.get(SEARCH, params={"q": "calculus"})
        assert response.status_code == 200
        data = response.json()
        assert data["search_query"] == "calculus"
        assert data["total_materials"] == 2
        assert data["total_comments"] == 1
        assert data["total_subjects"] == 0
        assert data["has_more"] is False
        assert [r["id"] for r in data["results"]] == ["m1", "m2", "c1"]
        first, _, comment = data["results"]
        assert first["type"] == "material"
        assert first["relevance_score"] == 3
        assert first["snippet"] == "<mark>Calculus</mark> notes"
        assert comment["type"] == "comment"
        assert comment["relevance_score"] == 1
        assert comment["material_id"] == "m1"
        assert comment["description"] == "Comment by Chen"

    async def test_echoes_applied_filters(
        self, client: AsyncClient, override_search: SearchService
    ) -> None:
        response = await client.get(
            SEARCH, params={"q": "calculus", "material_type": "exam_paper", "semester": 1}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["filters"] == {"material_type": "exam_paper", "semester": 1}
        assert [m["id"] for m in data["materials"]] == ["m2"]

    async def test_has_more_when_total_exceeds_limit(
        self, client: AsyncClient, override_search: SearchService
    ) -> None:
        response = await client.get(SEARCH, params={"q": "calculus", "limit": 1})
        assert response.status_code == 200
        data = response.json()
        assert data["has_more"] is True
        assert len(data["results"]) == 1
        assert data["total_materials"] == 2

    async def test_date_from_after_date_to_is_400(
        self, client: AsyncClient, override_search: SearchService
    ) -> None:
        response = await client.get(
            SEARCH,
            params={"q": "x", "date_from": "2025-02-01T00:00:00Z", "date_to": "2025-01-01T00:00:00Z"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"] == {"field": "date_from"}

    async def test_naive_dates_are_treated_as_utc(
        self, client: AsyncClient, override_search: SearchService
    ) -> None:
        response = await client.get(
            SEARCH,
            params={"q": "calculus", "date_from": "2025-03-01T00:00:00", "date_to": "2025-03-31T00:00:00"},
        )
        assert response.status_code == 200
        assert [m["id"] for m in response.json()["materials"]] == ["m2"]

    @pytest.mark.parametrize(
        "params",
        [
            {"limit": 101},
            {"offset": -1},
            {"material_type": "video"},
            {"semester": 0},
            {"sort_by": "popularity"},
        ],
    )
    async def test_invalid_query_params_are_422(
        self, client: AsyncClient, override_search: SearchService, params: dict
    ) -> None:
        response = await client.get(SEARCH, params={"q": "x", **params})
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_store_unavailable_is_503(self, client: AsyncClient) -> None:
        """Without an initialized Firestore client the search dependency fails with 503."""
        response = await client.get(SEARCH, params={"q": "calculus"})
        assert response.status_code == 503
        assert response.json()["error"] == "STORE_UNAVAILABLE"


async def test_search_materials_endpoint(client: AsyncClient, override_search: SearchService) -> None:
    response = await client.get(f"{SEARCH}/materials", params={"q": "physics", "sort_by": "date"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    item = data["items"][0]
    assert item["id"] == "m2"
    assert item["material_type"] == "exam_paper"
    assert item["highlighted_fields"]["subject_name"] == "<mark>PHYSICS</mark>"


async def test_blank_filter_params_are_ignored(
    client: AsyncClient, override_search: SearchService
) -> None:
    """Empty form fields (?programme_id=&subject_code=) mean no filter, not an empty match."""
    params = {"q": "calculus", "programme_id": "", "subject_code": "", "uploader_id": " "}
    response = await client.get(f"{SEARCH}/materials", params=params)
    assert response.status_code == 200
    assert response.json()["total"] == 2

    response = await client.get(SEARCH, params=params)
    assert response.json()["filters"] == {}

    response = await client.get(f"{SEARCH}/comments", params={"q": "", "material_id": ""})
    assert response.json()["total"] == 2


async def test_search_comments_scoped_to_material(
    client: AsyncClient, override_search: SearchService
) -> None:
    response = await client.get(f"{SEARCH}/comments", params={"q": "", "material_id": "m2"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    item = data["items"][0]
    assert item["id"] == "c2"
    assert item["material_title"] == "Physics past paper"
    assert item["subject_code"] == "PHY10001"


async def test_search_subjects_reports_material_count(
    client: AsyncClient, override_search: SearchService
) -> None:
    response = await client.get(f"{SEARCH}/subjects", params={"q": "phys"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    subject = data["items"][0]
    assert subject["subject_code"] == "PHY10001"
    assert subject["material_count"] == 1
    assert subject["highlighted_fields"]["subject_name"] == "<mark>PHYS</mark>ICS"


async def test_search_subjects_empty_query_returns_nothing(
    client: AsyncClient, override_search: SearchService
) -> None:
    response = await client.get(f"{SEARCH}/subjects", params={"q": ""})
    assert response.status_code == 200
    assert response.json() == {"items": [], "total": 0}


async def test_suggestions_endpoint(client: AsyncClient, override_search: SearchService) -> None:
    response = await client.get(f"{SEARCH}/suggestions", params={"q": "calc", "limit": 6})
    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "calc"
    assert data["suggestions"][:2] == ["Calculus notes", "Physics past paper"]
    assert "MATHEMATICS" in data["suggestions"]


async def test_suggestions_short_query_is_empty(
    client: AsyncClient, override_search: SearchService
) -> None:
    response = await client.get(f"{SEARCH}/suggestions", params={"q": "c"})
    assert response.status_code == 200
    assert response.json()["suggestions"] == []


def test_generic_handler_hides_detail_unless_debug() -> None:
    """Unhandled exceptions map to 500; message is generic unless debug is on."""
    request = MagicMock()
    with patch("app.core.exception_handlers.get_settings") as mock_settings:
        mock_settings.return_value.debug = False
        response = _generic_exception_handler(request, RuntimeError("boom"))
    assert response.status_code == 500
    assert b"Internal server error" in response.body

    with patch("app.core.exception_handlers.get_settings") as mock_settings:
        mock_settings.return_value.debug = True
        response = _generic_exception_handler(request, RuntimeError("boom"))
    assert b"boom" in response.body
