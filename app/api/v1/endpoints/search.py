"""Search API: relevance-ranked search across materials, comments, and subjects."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_search_service
from app.application.dtos.search import DateRange, SearchFilters, SearchOptions
from app.application.use_cases.search import SearchService
from app.core.config import get_settings
from app.core.limiter import limit_search, limit_suggestions
from app.domain.enums import MaterialType, SearchSortBy, SearchSortOrder
from app.domain.exceptions import ValidationException
from app.schemas.search import (
    CommentSearchResponse,
    MaterialSearchResponse,
    SearchResultsResponse,
    SubjectSearchResponse,
    SuggestionsResponse,
)
from app.shared.utils.datetime import ensure_utc

router = APIRouter()


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def search_filters(
    programme_id: str | None = Query(None, max_length=64),
    subject_code: str | None = Query(None, max_length=64),
    material_type: MaterialType | None = Query(None),
    semester: int | None = Query(None, ge=1, le=12),
    uploader_id: str | None = Query(None, max_length=128),
    date_from: datetime | None = Query(None, description="Inclusive lower bound (ISO 8601)"),
    date_to: datetime | None = Query(None, description="Inclusive upper bound (ISO 8601)"),
) -> SearchFilters:
    """Build SearchFilters from query parameters. Blank strings mean unset; date_from after date_to is a 400."""
    date_range = None
    if date_from is not None or date_to is not None:
        date_from, date_to = ensure_utc(date_from), ensure_utc(date_to)
        if date_from is not None and date_to is not None and date_from > date_to:
            raise ValidationException("date_from must not be after date_to", field="date_from")
        date_range = DateRange(start=date_from, end=date_to)
    return SearchFilters(
        programme_id=_blank_to_none(programme_id),
        subject_code=_blank_to_none(subject_code),
        material_type=material_type,
        semester=semester,
        uploader_id=_blank_to_none(uploader_id),
        date_range=date_range,
    )


def _options(
    sort_by: SearchSortBy,
    sort_order: SearchSortOrder,
    limit: int | None,
    offset: int,
) -> SearchOptions:
    if limit is None:
        limit = get_settings().search_default_limit
    return SearchOptions(sort_by=sort_by, sort_order=sort_order, limit=limit, offset=offset)


@router.get("", response_model=SearchResultsResponse)
@limit_search
async def search_all(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    filters: Annotated[SearchFilters, Depends(search_filters)],
    q: str = Query("", max_length=500, description="Search term (case-insensitive substring)"),
    sort_by: SearchSortBy = Query(SearchSortBy.RELEVANCE),
    sort_order: SearchSortOrder = Query(SearchSortOrder.DESC),
    limit: int | None = Query(None, ge=0, le=100),
    offset: int = Query(0, ge=0),
):
    """Search materials, comments, and subjects at once.

    Materials and comments are also merged into one relevance-ranked list.
    """
    out = await search_svc.search_all(q, filters, _options(sort_by, sort_order, limit, offset))
    return SearchResultsResponse.from_results(out)


@router.get("/materials", response_model=MaterialSearchResponse)
@limit_search
async def search_materials(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    filters: Annotated[SearchFilters, Depends(search_filters)],
    q: str = Query("", max_length=500),
    sort_by: SearchSortBy = Query(SearchSortBy.RELEVANCE),
    sort_order: SearchSortOrder = Query(SearchSortOrder.DESC),
    limit: int | None = Query(None, ge=0, le=100),
    offset: int = Query(0, ge=0),
):
    """Search approved materials (title, description, subject, uploader, type)."""
    page = await search_svc.search_materials(q, filters, _options(sort_by, sort_order, limit, offset))
    return MaterialSearchResponse.from_page(page)


@router.get("/comments", response_model=CommentSearchResponse)
@limit_search
async def search_comments(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    filters: Annotated[SearchFilters, Depends(search_filters)],
    q: str = Query("", max_length=500),
    material_id: str | None = Query(None, max_length=128, description="Restrict to one material"),
    sort_by: SearchSortBy = Query(SearchSortBy.DATE),
    sort_order: SearchSortOrder = Query(SearchSortOrder.DESC),
    limit: int | None = Query(None, ge=0, le=100),
    offset: int = Query(0, ge=0),
):
    """Search comments under approved materials (newest first by default)."""
    page = await search_svc.search_comments(
        q,
        filters,
        _options(sort_by, sort_order, limit, offset),
        material_id=_blank_to_none(material_id),
    )
    return CommentSearchResponse.from_page(page)


@router.get("/subjects", response_model=SubjectSearchResponse)
@limit_search
async def search_subjects(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    filters: Annotated[SearchFilters, Depends(search_filters)],
    q: str = Query("", max_length=500),
    sort_by: SearchSortBy = Query(SearchSortBy.RELEVANCE),
    sort_order: SearchSortOrder = Query(SearchSortOrder.DESC),
    limit: int | None = Query(None, ge=0, le=100),
    offset: int = Query(0, ge=0),
):
    """Search subjects by name, code, and description. An empty q returns nothing."""
    page = await search_svc.search_subjects(q, filters, _options(sort_by, sort_order, limit, offset))
    return SubjectSearchResponse.from_page(page)


@router.get("/suggestions", response_model=SuggestionsResponse)
@limit_suggestions
async def search_suggestions(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query("", max_length=200),
    limit: int | None = Query(None, ge=0, le=30),
):
    """Type-ahead suggestions from material titles, subject names, and uploader names."""
    if limit is None:
        limit = get_settings().suggestion_default_limit
    suggestions = await search_svc.get_search_suggestions(q, limit)
    return SuggestionsResponse(query=q, suggestions=suggestions)
