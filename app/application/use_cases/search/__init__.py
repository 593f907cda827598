"""Search use cases: per-entity searches, combined search, and suggestions."""

from app.application.use_cases.search.comments import CommentSearch
from app.application.use_cases.search.mappers import comment_to_result, material_to_result
from app.application.use_cases.search.materials import MaterialSearch
from app.application.use_cases.search.service import SearchService
from app.application.use_cases.search.subjects import SubjectSearch

__all__ = [
    "CommentSearch",
    "MaterialSearch",
    "SearchService",
    "SubjectSearch",
    "comment_to_result",
    "material_to_result",
]
