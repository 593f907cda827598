"""Repository interfaces (ports) for the search core.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Readers apply structural (exact-match) predicates only; text matching and
scoring belong to the application layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from app.domain.enums import ApprovalStatus, MaterialType

if TYPE_CHECKING:
    from app.domain.entities import Comment, Material, Subject


@dataclass(frozen=True)
class MaterialCriteria:
    """Equality predicates for a material fetch. None means unconstrained."""

    approval_status: ApprovalStatus | None = ApprovalStatus.APPROVED
    programme_id: str | None = None
    semester: int | None = None
    subject_code: str | None = None
    material_type: MaterialType | None = None
    uploader_id: str | None = None


class IMaterialReader(Protocol):
    """Protocol for reading materials from the document store."""

    async def list_materials(self, criteria: MaterialCriteria) -> list[Material]:
        """Return materials matching criteria, most recently uploaded first."""

    async def count_approved(self, subject_code: str, programme_id: str) -> int:
        """Return the number of approved materials filed under subject_code in programme_id."""


class ICommentReader(Protocol):
    """Protocol for reading comments nested under a material."""

    async def list_for_material(self, material_id: str) -> list[Comment]:
        """Return the comments of one material, newest first."""


class ISubjectReader(Protocol):
    """Protocol for reading subject reference data."""

    async def list_subjects(
        self,
        programme_id: str | None = None,
        semester: int | None = None,
    ) -> list[Subject]:
        """Return subjects, optionally narrowed by programme and semester."""
