"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the reader interfaces.
"""

from app.application.interfaces import (
    ICommentReader,
    IMaterialReader,
    ISubjectReader,
    MaterialCriteria,
)
from app.application.services.relevance import RelevanceScorer
from app.application.use_cases.search import SearchService

__all__ = [
    "ICommentReader",
    "IMaterialReader",
    "ISubjectReader",
    "MaterialCriteria",
    "RelevanceScorer",
    "SearchService",
]
