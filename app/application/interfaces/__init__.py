"""Application interfaces (ports): reader protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    ICommentReader,
    IMaterialReader,
    ISubjectReader,
    MaterialCriteria,
)

__all__ = [
    "ICommentReader",
    "IMaterialReader",
    "ISubjectReader",
    "MaterialCriteria",
]
