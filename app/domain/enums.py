"""Domain enumerations for the EduBridge search service.

Enums represent fixed sets of domain values (material kinds, approval
workflow states, search ordering).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class MaterialType(_ValuesMixin, str, Enum):
    """Kind of study material."""

    NOTE = "note"
    EXAM_PAPER = "exam_paper"
    ANSWER_SCHEME = "answer_scheme"


class ApprovalStatus(_ValuesMixin, str, Enum):
    """Lecturer approval workflow state. Only approved materials are searchable."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserRole(_ValuesMixin, str, Enum):
    """Role of a material uploader or comment author."""

    STUDENT = "student"
    LECTURER = "lecturer"


class SearchSortBy(_ValuesMixin, str, Enum):
    """Sort key for entity search results."""

    RELEVANCE = "relevance"
    DATE = "date"
    TITLE = "title"
    DOWNLOADS = "downloads"


class SearchSortOrder(_ValuesMixin, str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class SearchResultType(_ValuesMixin, str, Enum):
    """Discriminator of the unified search result envelope."""

    MATERIAL = "material"
    COMMENT = "comment"
