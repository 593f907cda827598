"""Envelope mapping of material and comment hits."""

from app.application.dtos.search import CommentHit, MaterialHit
from app.application.use_cases.search.mappers import (
    comment_title,
    comment_to_result,
    material_to_result,
)
from app.domain.enums import MaterialType, SearchResultType


def test_material_snippet_falls_back_to_escaped_title(make_material) -> None:
    """Without title/description highlights the snippet is the escaped title."""
    hit = MaterialHit(material=make_material(title="R&D <basics>"), relevance_score=1)
    env = material_to_result(hit)
    assert env.snippet == "R&amp;D &lt;basics&gt;"
    assert env.title == "R&D <basics>"


def test_material_snippet_prefers_title_highlight(make_material) -> None:
    hit = MaterialHit(
        material=make_material(title="Law", material_type=MaterialType.EXAM_PAPER),
        relevance_score=5,
        highlighted_fields={"title": "<mark>Law</mark>", "description": "x <mark>law</mark>"},
    )
    env = material_to_result(hit)
    assert env.snippet == "<mark>Law</mark>"
    assert env.type == SearchResultType.MATERIAL
    assert env.material_type == MaterialType.EXAM_PAPER
    assert env.comment_id is None


def test_comment_title_truncates_long_content() -> None:
    assert comment_title("short") == "short"
    assert comment_title("x" * 100) == "x" * 100
    assert comment_title("y" * 150) == "y" * 100 + "..."


def test_comment_envelope_has_flat_score_and_parent_context(make_comment) -> None:
    hit = CommentHit(
        comment=make_comment(id="c9", material_id="m3", content="notes", author_name="Hana"),
        material_title="Accounting",
        subject_code="ACC101",
        programme_id="DBS",
        relevance_score=3,
        highlighted_fields={"content": "<mark>notes</mark>"},
    )
    env = comment_to_result(hit)
    assert env.relevance_score == 1
    assert env.type == SearchResultType.COMMENT
    assert env.id == "c9"
    assert env.comment_id == "c9"
    assert env.material_id == "m3"
    assert env.subject_code == "ACC101"
    assert env.programme_id == "DBS"
    assert env.description == "Comment by Hana"
    assert env.snippet == "<mark>notes</mark>"
    assert env.file_name is None
