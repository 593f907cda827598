"""Firestore-backed reader implementations for the search core."""

from app.infrastructure.firebase.repositories.comment_repo_firestore import (
    FirestoreCommentRepository,
)
from app.infrastructure.firebase.repositories.material_repo_firestore import (
    FirestoreMaterialRepository,
)
from app.infrastructure.firebase.repositories.subject_repo_firestore import (
    FirestoreSubjectRepository,
)

__all__ = [
    "FirestoreCommentRepository",
    "FirestoreMaterialRepository",
    "FirestoreSubjectRepository",
]
