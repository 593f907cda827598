"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse, ReadinessErrorResponse, ReadinessResponse
from app.schemas.search import (
    CommentSearchResponse,
    MaterialSearchResponse,
    SearchResultResponse,
    SearchResultsResponse,
    SubjectSearchResponse,
    SuggestionsResponse,
)

__all__ = [
    "CommentSearchResponse",
    "HealthResponse",
    "MaterialSearchResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SearchResultResponse",
    "SearchResultsResponse",
    "SubjectSearchResponse",
    "SuggestionsResponse",
]
