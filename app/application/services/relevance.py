"""Field matching, highlighting, and weighted relevance scoring.

Matching is case-insensitive literal substring containment. Highlighted
copies wrap every occurrence in the highlight tags and HTML-escape the rest,
so the only markup in a highlighted value is the highlight wrapper itself.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_OPEN_TAG = "<mark>"
DEFAULT_CLOSE_TAG = "</mark>"

FieldWeights = tuple[tuple[str, int], ...]

MATERIAL_FIELD_WEIGHTS: FieldWeights = (
    ("title", 3),
    ("description", 2),
    ("subject_name", 2),
    ("uploader_name", 1),
    ("subject_code", 1),
    ("material_type", 1),
)

COMMENT_FIELD_WEIGHTS: FieldWeights = (
    ("content", 2),
    ("author_name", 1),
)

SUBJECT_FIELD_WEIGHTS: FieldWeights = (
    ("subject_name", 3),
    ("subject_code", 2),
    ("description", 1),
)


@dataclass(frozen=True)
class FieldMatch:
    """Result of matching one field: whether it matched and its highlighted text."""

    matched: bool
    highlighted: str


@dataclass(frozen=True)
class RelevanceScore:
    """Additive score over matching fields plus their highlighted text, keyed by field."""

    score: int = 0
    highlights: dict[str, str] = field(default_factory=dict)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def match_field(
    text: str | None,
    term: str | None,
    *,
    open_tag: str = DEFAULT_OPEN_TAG,
    close_tag: str = DEFAULT_CLOSE_TAG,
) -> FieldMatch:
    """Match term against text and build a highlighted copy.

    Args:
        text: Field value; None is treated as empty.
        term: Query term; surrounding whitespace is ignored. Empty never matches.
        open_tag: Marker inserted before each occurrence.
        close_tag: Marker inserted after each occurrence.

    Returns:
        FieldMatch. When unmatched, highlighted is the original text unchanged.
    """
    source = text or ""
    needle = (term or "").strip()
    if not needle or not source:
        return FieldMatch(matched=False, highlighted=source)

    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    parts: list[str] = []
    pos = 0
    for m in pattern.finditer(source):
        parts.append(_escape(source[pos : m.start()]))
        parts.append(f"{open_tag}{_escape(m.group(0))}{close_tag}")
        pos = m.end()
    if not parts:
        return FieldMatch(matched=False, highlighted=source)
    parts.append(_escape(source[pos:]))
    return FieldMatch(matched=True, highlighted="".join(parts))


def field_text(record: Any, field_name: str) -> str:
    """Return a record attribute as text for matching. Missing/None is ''; enums use their value."""
    value = getattr(record, field_name, None)
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def score_record(
    record: Any,
    term: str | None,
    field_weights: FieldWeights,
    *,
    open_tag: str = DEFAULT_OPEN_TAG,
    close_tag: str = DEFAULT_CLOSE_TAG,
) -> RelevanceScore:
    """Sum the weights of every configured field that contains term.

    Weights are additive: a material matching on title (3) and subject_name (2)
    scores 5. A record with no matching field scores 0 with no highlights.
    """
    score = 0
    highlights: dict[str, str] = {}
    for field_name, weight in field_weights:
        result = match_field(
            field_text(record, field_name),
            term,
            open_tag=open_tag,
            close_tag=close_tag,
        )
        if result.matched:
            score += weight
            highlights[field_name] = result.highlighted
    return RelevanceScore(score=score, highlights=highlights)


class RelevanceScorer:
    """Scorer bound to configured highlight tags. Stateless; safe to share."""

    def __init__(
        self,
        open_tag: str = DEFAULT_OPEN_TAG,
        close_tag: str = DEFAULT_CLOSE_TAG,
    ) -> None:
        self.open_tag = open_tag
        self.close_tag = close_tag

    def match(self, text: str | None, term: str | None) -> FieldMatch:
        return match_field(text, term, open_tag=self.open_tag, close_tag=self.close_tag)

    def score(self, record: Any, term: str | None, field_weights: FieldWeights) -> RelevanceScore:
        return score_record(
            record,
            term,
            field_weights,
            open_tag=self.open_tag,
            close_tag=self.close_tag,
        )
