"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Use these constants so collection names
stay consistent with the documents the upload and moderation flows write.

Example:
    from app.infrastructure.firebase.client import get_firestore_client
    from app.infrastructure.firebase.collections import (
        COLLECTION_MATERIALS,
        SUBCOLLECTION_COMMENTS,
    )

    db = get_firestore_client()
    if db:
        comments = db.collection(COLLECTION_MATERIALS).document(material_id).collection(
            SUBCOLLECTION_COMMENTS
        )
"""

COLLECTION_MATERIALS = "materials"
COLLECTION_SUBJECTS = "subjects"

# Comments live under each material: materials/{materialId}/comments
SUBCOLLECTION_COMMENTS = "comments"
