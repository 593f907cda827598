"""Firestore-backed subject reader (implements ISubjectReader) with a TTL cache.

Subjects are reference data that change rarely, so listings are cached per
(programme, semester) for cache_ttl seconds. Staleness within the TTL is
accepted. Cached values are plain dicts so Redis can store them as JSON.
"""

from __future__ import annotations

import dataclasses
import logging

from app.domain.entities import Subject
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import subjects_key
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_SUBJECTS
from app.infrastructure.firebase.repositories.mappers import subject_from_document

logger = logging.getLogger(__name__)


class FirestoreSubjectRepository:
    """Subject reader using Firestore, optionally fronted by a cache."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        cache: CacheProtocol | None = None,
        cache_ttl: int = 900,
    ) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_SUBJECTS)
        self._cache = cache
        self._cache_ttl = cache_ttl

    async def _fetch(self, programme_id: str | None, semester: int | None) -> list[Subject]:
        q = self._coll.query()
        if programme_id is not None:
            q = q.where("programmeId", "==", programme_id)
        if semester is not None:
            q = q.where("semester", "==", semester)
        subjects: list[Subject] = []
        async for snapshot in q.stream():
            subjects.append(subject_from_document(snapshot.id, snapshot.to_dict()))
        return subjects

    async def list_subjects(
        self,
        programme_id: str | None = None,
        semester: int | None = None,
    ) -> list[Subject]:
        """Return subjects, optionally narrowed by programme and semester."""
        try:
            key: str | None = subjects_key(programme_id, semester)
        except ValueError:
            logger.debug("Subject listing for programme %r is not cacheable", programme_id)
            key = None
        use_cache = key is not None and self._cache is not None and self._cache.is_available()
        if use_cache:
            cached = await self._cache.get(key)
            if cached is not None:
                return [Subject(**row) for row in cached]

        subjects = await self._fetch(programme_id, semester)
        if use_cache:
            await self._cache.set(
                key,
                [dataclasses.asdict(s) for s in subjects],
                ttl=self._cache_ttl,
            )
        logger.debug("Loaded %d subjects for %s", len(subjects), key or programme_id)
        return subjects
