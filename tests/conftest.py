"""Pytest configuration and fixtures for the search service.

Uses app.main:app for HTTP tests. Readers are AsyncMock fakes built from
in-memory entity lists, so no test needs Firestore or Redis. All imports
use app.*.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.limiter import limiter
from app.domain.entities import Comment, Material, Subject
from app.domain.enums import ApprovalStatus, MaterialType, UserRole
from app.main import app
from tests.fakes import fake_comment_reader, fake_material_reader, fake_subject_reader


def _make_material(**overrides) -> Material:
    fields = {
        "id": "m1",
        "title": "Untitled",
        "material_type": MaterialType.NOTE,
        "programme_id": "DBS",
        "semester": 1,
        "subject_code": "DPP10001",
        "subject_name": "GENERAL STUDIES",
        "uploader_id": "u1",
        "uploader_name": "Uploader",
        "uploader_role": UserRole.STUDENT,
        "approval_status": ApprovalStatus.APPROVED,
        "upload_date": datetime(2025, 1, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Material(**fields)


def _make_comment(**overrides) -> Comment:
    fields = {
        "id": "c1",
        "material_id": "m1",
        "content": "",
        "author_id": "a1",
        "author_name": "Author",
        "author_role": UserRole.STUDENT,
        "created_at": datetime(2025, 1, 2, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Comment(**fields)


def _make_subject(**overrides) -> Subject:
    fields = {
        "id": "DPP10001",
        "subject_code": "DPP10001",
        "subject_name": "GENERAL STUDIES",
        "programme_id": "DBS",
        "semester": 1,
    }
    fields.update(overrides)
    return Subject(**fields)


@pytest.fixture
def make_material() -> Callable[..., Material]:
    """Factory for approved Material entities; pass keyword overrides."""
    return _make_material


@pytest.fixture
def make_comment() -> Callable[..., Comment]:
    return _make_comment


@pytest.fixture
def make_subject() -> Callable[..., Subject]:
    return _make_subject



@pytest.fixture
def readers() -> Callable[..., tuple[AsyncMock, AsyncMock, AsyncMock]]:
    """Build (material_reader, comment_reader, subject_reader) fakes from entity lists."""

    def build(
        materials: list[Material] | None = None,
        comments: list[Comment] | None = None,
        subjects: list[Subject] | None = None,
    ) -> tuple[AsyncMock, AsyncMock, AsyncMock]:
        return (
            fake_material_reader(materials or []),
            fake_comment_reader(comments or []),
            fake_subject_reader(subjects or []),
        )

    return build


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI). Clears rate limits and dependency overrides."""
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
