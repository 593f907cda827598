"""Firestore-backed material reader (implements IMaterialReader)."""

from __future__ import annotations

import logging

from app.application.interfaces.repositories import MaterialCriteria
from app.domain.entities import Material
from app.domain.enums import ApprovalStatus
from app.infrastructure.firebase._rest_client import FirestoreRESTClient, _Query
from app.infrastructure.firebase.collections import COLLECTION_MATERIALS
from app.infrastructure.firebase.repositories.mappers import material_from_document

logger = logging.getLogger(__name__)


class FirestoreMaterialRepository:
    """Material reader using Firestore. Applies equality predicates server-side."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_MATERIALS)

    def _build_query(self, criteria: MaterialCriteria) -> _Query:
        q = self._coll.query()
        if criteria.approval_status is not None:
            q = q.where("approvalStatus", "==", criteria.approval_status.value)
        if criteria.programme_id is not None:
            q = q.where("programmeId", "==", criteria.programme_id)
        if criteria.semester is not None:
            q = q.where("semester", "==", criteria.semester)
        if criteria.subject_code is not None:
            q = q.where("subjectCode", "==", criteria.subject_code)
        if criteria.material_type is not None:
            q = q.where("materialType", "==", criteria.material_type.value)
        if criteria.uploader_id is not None:
            q = q.where("uploaderId", "==", criteria.uploader_id)
        return q.order_by("uploadDate", "DESCENDING")

    async def list_materials(self, criteria: MaterialCriteria) -> list[Material]:
        """Return materials matching criteria, most recently uploaded first.

        Documents that cannot be mapped (e.g. unknown materialType) are skipped
        with a warning.
        """
        materials: list[Material] = []
        async for snapshot in self._build_query(criteria).stream():
            try:
                materials.append(material_from_document(snapshot.id, snapshot.to_dict()))
            except ValueError:
                logger.warning("Skipping malformed material document %s", snapshot.id, exc_info=True)
        return materials

    async def count_approved(self, subject_code: str, programme_id: str) -> int:
        """Return the number of approved materials for a subject in a programme."""
        q = (
            self._coll.where("subjectCode", "==", subject_code)
            .where("programmeId", "==", programme_id)
            .where("approvalStatus", "==", ApprovalStatus.APPROVED.value)
        )
        return await q.count()
