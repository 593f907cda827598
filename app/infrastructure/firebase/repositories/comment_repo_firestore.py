"""Firestore-backed comment reader (implements ICommentReader)."""

from __future__ import annotations

import logging

from app.domain.entities import Comment
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import (
    COLLECTION_MATERIALS,
    SUBCOLLECTION_COMMENTS,
)
from app.infrastructure.firebase.repositories.mappers import comment_from_document

logger = logging.getLogger(__name__)


class FirestoreCommentRepository:
    """Reads the comments subcollection of a material."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._materials = client.collection(COLLECTION_MATERIALS)

    async def list_for_material(self, material_id: str) -> list[Comment]:
        """Return the comments of one material, newest first."""
        q = (
            self._materials.document(material_id)
            .collection(SUBCOLLECTION_COMMENTS)
            .order_by("createdAt", "DESCENDING")
        )
        comments: list[Comment] = []
        async for snapshot in q.stream():
            try:
                comments.append(comment_from_document(snapshot.id, material_id, snapshot.to_dict()))
            except ValueError:
                logger.warning(
                    "Skipping malformed comment %s on material %s",
                    snapshot.id,
                    material_id,
                    exc_info=True,
                )
        return comments
