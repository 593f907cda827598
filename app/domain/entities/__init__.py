"""Domain entities: materials, comments, and subjects as read by search."""

from app.domain.entities.comment import Comment, CommentAttachment
from app.domain.entities.material import Material
from app.domain.entities.subject import Subject

__all__ = [
    "Comment",
    "CommentAttachment",
    "Material",
    "Subject",
]
