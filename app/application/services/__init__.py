"""Application services: field matching and relevance scoring."""

from app.application.services.relevance import (
    COMMENT_FIELD_WEIGHTS,
    MATERIAL_FIELD_WEIGHTS,
    SUBJECT_FIELD_WEIGHTS,
    FieldMatch,
    RelevanceScore,
    RelevanceScorer,
    match_field,
    score_record,
)

__all__ = [
    "COMMENT_FIELD_WEIGHTS",
    "MATERIAL_FIELD_WEIGHTS",
    "SUBJECT_FIELD_WEIGHTS",
    "FieldMatch",
    "RelevanceScore",
    "RelevanceScorer",
    "match_field",
    "score_record",
]
