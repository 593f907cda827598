"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the Firestore client, readers, and the
search service. All use cases are built from infrastructure implementations
here; routes depend only on these dependencies, not on infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.application.services.relevance import RelevanceScorer
from app.application.use_cases.search import SearchService
from app.core.config import Settings, get_settings
from app.domain.exceptions import StoreUnavailableException
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.client import get_firestore_client
from app.infrastructure.firebase.repositories import (
    FirestoreCommentRepository,
    FirestoreMaterialRepository,
    FirestoreSubjectRepository,
)


def get_firestore() -> FirestoreRESTClient:
    """Return the Firestore client or raise StoreUnavailableException (503)."""
    client = get_firestore_client()
    if client is None:
        raise StoreUnavailableException("firestore")
    return client


def get_cache(request: Request) -> CacheProtocol | None:
    """Reference-data cache created at startup (None outside the lifespan)."""
    return getattr(request.app.state, "cache", None)


def get_material_reader(
    client: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> FirestoreMaterialRepository:
    return FirestoreMaterialRepository(client)


def get_comment_reader(
    client: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> FirestoreCommentRepository:
    return FirestoreCommentRepository(client)


def get_subject_reader(
    client: Annotated[FirestoreRESTClient, Depends(get_firestore)],
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> FirestoreSubjectRepository:
    """Subject reader fronted by the app cache with CACHE_TTL_SUBJECTS."""
    return FirestoreSubjectRepository(client, cache=cache, cache_ttl=settings.cache_ttl_subjects)


def get_search_service(
    material_reader: Annotated[FirestoreMaterialRepository, Depends(get_material_reader)],
    comment_reader: Annotated[FirestoreCommentRepository, Depends(get_comment_reader)],
    subject_reader: Annotated[FirestoreSubjectRepository, Depends(get_subject_reader)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SearchService:
    """Search use case configured from settings (limits, highlight tags, fan-out)."""
    return SearchService(
        material_reader,
        comment_reader,
        subject_reader,
        RelevanceScorer(settings.highlight_open_tag, settings.highlight_close_tag),
        default_limit=settings.search_default_limit,
        max_limit=settings.search_max_limit,
        comment_fetch_concurrency=settings.comment_fetch_concurrency,
        suggestion_min_length=settings.suggestion_min_length,
        suggestion_pool_size=settings.suggestion_pool_size,
    )
