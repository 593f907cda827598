"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import Comment, CommentAttachment, Material, Subject
from app.domain.enums import (
    ApprovalStatus,
    MaterialType,
    SearchResultType,
    SearchSortBy,
    SearchSortOrder,
    UserRole,
)
from app.domain.exceptions import (
    EduBridgeException,
    StoreUnavailableException,
    ValidationException,
)

__all__ = [
    # Entities
    "Comment",
    "CommentAttachment",
    "Material",
    "Subject",
    # Enums
    "ApprovalStatus",
    "MaterialType",
    "SearchResultType",
    "SearchSortBy",
    "SearchSortOrder",
    "UserRole",
    # Exceptions
    "EduBridgeException",
    "StoreUnavailableException",
    "ValidationException",
]
