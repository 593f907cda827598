"""Comment domain entity (discussion under a material)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import UserRole


@dataclass(frozen=True)
class CommentAttachment:
    """File attached to a comment."""

    file_name: str
    file_size: int
    file_type: str
    download_url: str


@dataclass(frozen=True)
class Comment:
    """Free-text comment nested under its parent material."""

    id: str
    material_id: str
    content: str
    author_id: str
    author_name: str
    author_role: UserRole
    created_at: datetime | None = None
    attachments: tuple[CommentAttachment, ...] = field(default_factory=tuple)
