"""Explicit mapping from Firestore documents (camelCase fields) to domain entities.

Store documents are written by the upload, comment, and admin flows; optional
fields may be missing, null, or of a legacy type. Enum fields that carry an
unknown value raise ValueError so the caller can skip the document.
"""

from __future__ import annotations

from typing import Any

from app.domain.entities import Comment, CommentAttachment, Material, Subject
from app.domain.enums import ApprovalStatus, MaterialType, UserRole
from app.shared.utils.datetime import coerce_datetime


def _str(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return default if value is None else str(value)


def _opt_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return None if value is None else str(value)


def _int(data: dict[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def material_from_document(doc_id: str, data: dict[str, Any]) -> Material:
    """Build a Material from a `materials/{id}` document."""
    return Material(
        id=doc_id,
        title=_str(data, "title"),
        description=_opt_str(data, "description"),
        material_type=MaterialType(data.get("materialType")),
        programme_id=_str(data, "programmeId"),
        semester=_int(data, "semester"),
        subject_code=_str(data, "subjectCode"),
        subject_name=_str(data, "subjectName"),
        uploader_id=_str(data, "uploaderId"),
        uploader_name=_str(data, "uploaderName"),
        uploader_role=UserRole(data.get("uploaderRole") or UserRole.STUDENT.value),
        approval_status=ApprovalStatus(data.get("approvalStatus") or ApprovalStatus.PENDING.value),
        upload_date=coerce_datetime(data.get("uploadDate")),
        file_name=_str(data, "fileName"),
        file_size=_int(data, "fileSize"),
        file_type=_str(data, "fileType"),
        download_url=_str(data, "downloadURL"),
        download_count=_int(data, "downloadCount"),
        view_count=_int(data, "views"),
    )


def _attachment(raw: dict[str, Any]) -> CommentAttachment:
    return CommentAttachment(
        file_name=_str(raw, "fileName"),
        file_size=_int(raw, "fileSize"),
        file_type=_str(raw, "fileType"),
        download_url=_str(raw, "downloadURL"),
    )


def comment_from_document(doc_id: str, material_id: str, data: dict[str, Any]) -> Comment:
    """Build a Comment from a `materials/{material_id}/comments/{id}` document.

    The parent material id comes from the path; a stored materialId is ignored.
    """
    raw_attachments = data.get("attachments") or []
    return Comment(
        id=doc_id,
        material_id=material_id,
        content=_str(data, "content"),
        author_id=_str(data, "authorId"),
        author_name=_str(data, "authorName"),
        author_role=UserRole(data.get("authorRole") or UserRole.STUDENT.value),
        created_at=coerce_datetime(data.get("createdAt")),
        attachments=tuple(_attachment(a) for a in raw_attachments if isinstance(a, dict)),
    )


def subject_from_document(doc_id: str, data: dict[str, Any]) -> Subject:
    """Build a Subject from a `subjects/{id}` document."""
    return Subject(
        id=doc_id,
        subject_code=_str(data, "subjectCode", doc_id),
        subject_name=_str(data, "subjectName"),
        programme_id=_str(data, "programmeId"),
        semester=_int(data, "semester"),
        credit_hours=_int(data, "creditHours"),
        description=_opt_str(data, "description"),
        is_active=bool(data.get("isActive", True)),
    )
