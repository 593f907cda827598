"""Search API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.search import (
    CommentHit,
    MaterialHit,
    SearchPage,
    SearchResults,
    SubjectSearchResult,
)
from app.domain.enums import MaterialType, SearchResultType, UserRole


class SearchResultResponse(BaseModel):
    """Unified envelope for a material or comment hit (combined ranking)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    type: SearchResultType = Field(..., description="material | comment")
    title: str
    snippet: str = Field(..., description="Highlighted fragment; only <mark> markup is unescaped")
    relevance_score: int
    description: str | None = None
    programme_id: str | None = None
    subject_code: str | None = None
    material_id: str | None = None
    comment_id: str | None = None
    author_name: str | None = None
    created_at: datetime | None = None
    material_type: MaterialType | None = None
    file_name: str | None = None
    file_size: int | None = None
    file_type: str | None = None
    download_url: str | None = None


class SubjectResultResponse(BaseModel):
    """Matching subject with its approved material count."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    subject_code: str
    subject_name: str
    programme_id: str
    semester: int
    material_count: int
    description: str | None = None
    relevance_score: int = 0
    highlighted_fields: dict[str, str] = Field(default_factory=dict)


class MaterialResultResponse(BaseModel):
    """Approved material hit with relevance score and highlighted fields."""

    id: str
    title: str
    description: str | None = None
    material_type: MaterialType
    programme_id: str
    semester: int
    subject_code: str
    subject_name: str
    uploader_id: str
    uploader_name: str
    uploader_role: UserRole
    upload_date: datetime | None = None
    file_name: str = ""
    file_size: int = 0
    file_type: str = ""
    download_url: str = ""
    download_count: int = 0
    view_count: int = 0
    relevance_score: int = 0
    highlighted_fields: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_hit(cls, hit: MaterialHit) -> MaterialResultResponse:
        m = hit.material
        return cls(
            id=m.id,
            title=m.title,
            description=m.description,
            material_type=m.material_type,
            programme_id=m.programme_id,
            semester=m.semester,
            subject_code=m.subject_code,
            subject_name=m.subject_name,
            uploader_id=m.uploader_id,
            uploader_name=m.uploader_name,
            uploader_role=m.uploader_role,
            upload_date=m.upload_date,
            file_name=m.file_name,
            file_size=m.file_size,
            file_type=m.file_type,
            download_url=m.download_url,
            download_count=m.download_count,
            view_count=m.view_count,
            relevance_score=hit.relevance_score,
            highlighted_fields=dict(hit.highlighted_fields),
        )


class CommentAttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    file_name: str
    file_size: int
    file_type: str
    download_url: str


class CommentResultResponse(BaseModel):
    """Comment hit with the parent material context it was found under."""

    id: str
    material_id: str
    content: str
    author_id: str
    author_name: str
    author_role: UserRole
    created_at: datetime | None = None
    attachments: list[CommentAttachmentResponse] = Field(default_factory=list)
    material_title: str
    subject_code: str
    programme_id: str
    relevance_score: int = 0
    highlighted_fields: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_hit(cls, hit: CommentHit) -> CommentResultResponse:
        c = hit.comment
        return cls(
            id=c.id,
            material_id=c.material_id,
            content=c.content,
            author_id=c.author_id,
            author_name=c.author_name,
            author_role=c.author_role,
            created_at=c.created_at,
            attachments=[CommentAttachmentResponse.model_validate(a) for a in c.attachments],
            material_title=hit.material_title,
            subject_code=hit.subject_code,
            programme_id=hit.programme_id,
            relevance_score=hit.relevance_score,
            highlighted_fields=dict(hit.highlighted_fields),
        )


class MaterialSearchResponse(BaseModel):
    """One page of material hits; total is the match count before pagination."""

    items: list[MaterialResultResponse]
    total: int

    @classmethod
    def from_page(cls, page: SearchPage[MaterialHit]) -> MaterialSearchResponse:
        return cls(items=[MaterialResultResponse.from_hit(h) for h in page.items], total=page.total)


class CommentSearchResponse(BaseModel):
    """One page of comment hits; total is the match count before pagination."""

    items: list[CommentResultResponse]
    total: int

    @classmethod
    def from_page(cls, page: SearchPage[CommentHit]) -> CommentSearchResponse:
        return cls(items=[CommentResultResponse.from_hit(h) for h in page.items], total=page.total)


class SubjectSearchResponse(BaseModel):
    """One page of subject hits; total is the match count before pagination."""

    items: list[SubjectResultResponse]
    total: int

    @classmethod
    def from_page(cls, page: SearchPage[SubjectSearchResult]) -> SubjectSearchResponse:
        return cls(
            items=[SubjectResultResponse.model_validate(s) for s in page.items],
            total=page.total,
        )


class SearchResultsResponse(BaseModel):
    """Combined search response (materials, comments, subjects, and merged ranking)."""

    materials: list[SearchResultResponse]
    comments: list[SearchResultResponse]
    subjects: list[SubjectResultResponse]
    results: list[SearchResultResponse] = Field(
        ..., description="Materials and comments merged by relevance_score, truncated to limit"
    )
    total_materials: int
    total_comments: int
    total_subjects: int
    search_query: str
    filters: dict[str, Any] = Field(default_factory=dict, description="Filters that were applied")
    has_more: bool

    @classmethod
    def from_results(cls, out: SearchResults) -> SearchResultsResponse:
        return cls(
            materials=[SearchResultResponse.model_validate(r) for r in out.materials],
            comments=[SearchResultResponse.model_validate(r) for r in out.comments],
            subjects=[SubjectResultResponse.model_validate(s) for s in out.subjects],
            results=[SearchResultResponse.model_validate(r) for r in out.results],
            total_materials=out.total_materials,
            total_comments=out.total_comments,
            total_subjects=out.total_subjects,
            search_query=out.search_query,
            filters=out.filters.to_dict(),
            has_more=out.has_more,
        )


class SuggestionsResponse(BaseModel):
    """Type-ahead suggestions for a partial query."""

    query: str
    suggestions: list[str]
