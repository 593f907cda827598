"""Explicit mapping of material and comment hits into the unified SearchResult envelope.

Only the fields listed here reach the envelope; nothing else from the store
record leaks into results. Snippets are markup (highlight spans or escaped
text); title and description are plain text.
"""

from __future__ import annotations

import html

from app.application.dtos.search import CommentHit, MaterialHit, SearchResult
from app.core.constants import COMMENT_ENVELOPE_SCORE, COMMENT_TITLE_MAX_LENGTH
from app.domain.enums import SearchResultType


def material_to_result(hit: MaterialHit) -> SearchResult:
    """Envelope for a material: id, title, description, snippet, score, placement, uploader, file metadata.

    snippet is the highlighted title, else the highlighted description, else the escaped title.
    """
    material = hit.material
    highlighted = hit.highlighted_fields
    snippet = (
        highlighted.get("title")
        or highlighted.get("description")
        or html.escape(material.title, quote=False)
    )
    return SearchResult(
        id=material.id,
        type=SearchResultType.MATERIAL,
        title=material.title,
        description=material.description,
        snippet=snippet,
        relevance_score=hit.relevance_score,
        programme_id=material.programme_id,
        subject_code=material.subject_code,
        material_id=material.id,
        author_name=material.uploader_name,
        created_at=material.upload_date,
        material_type=material.material_type,
        file_name=material.file_name,
        file_size=material.file_size,
        file_type=material.file_type,
        download_url=material.download_url,
    )


def comment_title(content: str) -> str:
    """First COMMENT_TITLE_MAX_LENGTH characters of content, with '...' when truncated."""
    if len(content) > COMMENT_TITLE_MAX_LENGTH:
        return content[:COMMENT_TITLE_MAX_LENGTH] + "..."
    return content


def comment_to_result(hit: CommentHit) -> SearchResult:
    """Envelope for a comment: truncated content as title, author, parent material placement.

    The envelope score is always COMMENT_ENVELOPE_SCORE, whatever the comment's
    own field score was.
    """
    comment = hit.comment
    snippet = hit.highlighted_fields.get("content") or html.escape(
        comment.content, quote=False
    )
    return SearchResult(
        id=comment.id,
        type=SearchResultType.COMMENT,
        title=comment_title(comment.content),
        description=f"Comment by {comment.author_name}",
        snippet=snippet,
        relevance_score=COMMENT_ENVELOPE_SCORE,
        programme_id=hit.programme_id,
        subject_code=hit.subject_code,
        material_id=comment.material_id,
        comment_id=comment.id,
        author_name=comment.author_name,
        created_at=comment.created_at,
    )
