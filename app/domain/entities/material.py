"""Material domain entity (uploaded study material)."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import ApprovalStatus, MaterialType, UserRole


@dataclass(frozen=True)
class Material:
    """A single uploaded file with its academic placement and engagement counters.

    Owned by the uploader and mutated only by the approval workflow; search
    reads it as-is. Optional store fields arrive as None or empty values.
    """

    id: str
    title: str
    material_type: MaterialType
    programme_id: str
    semester: int
    subject_code: str
    subject_name: str
    uploader_id: str
    uploader_name: str
    uploader_role: UserRole
    approval_status: ApprovalStatus
    description: str | None = None
    upload_date: datetime | None = None
    file_name: str = ""
    file_size: int = 0
    file_type: str = ""
    download_url: str = ""
    download_count: int = 0
    view_count: int = 0

    def is_approved(self) -> bool:
        """Return whether the material passed lecturer approval."""
        return self.approval_status == ApprovalStatus.APPROVED
