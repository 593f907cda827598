"""Subject domain entity (course reference data within a programme semester)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Subject:
    """Subject reference data, e.g. DPP20023 INTERNATIONAL BUSINESS.

    Immutable for the duration of a search; cached with a bounded TTL.
    """

    id: str
    subject_code: str
    subject_name: str
    programme_id: str
    semester: int
    credit_hours: int = 0
    description: str | None = None
    is_active: bool = True
