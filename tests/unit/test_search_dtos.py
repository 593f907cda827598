"""Search DTO behaviour: date ranges, option clamping, filter echo, exceptions."""

from datetime import datetime, timezone

from app.application.dtos.search import DateRange, SearchFilters, SearchOptions
from app.domain.enums import MaterialType, SearchSortBy
from app.domain.exceptions import (
    EduBridgeException,
    StoreUnavailableException,
    ValidationException,
)


def _dt(day: int) -> datetime:
    return datetime(2025, 6, day, tzinfo=timezone.utc)


class TestDateRange:
    def test_open_range_contains_everything(self) -> None:
        assert DateRange().contains(None) is True
        assert DateRange().contains(_dt(1)) is True

    def test_bounds_are_inclusive(self) -> None:
        rng = DateRange(start=_dt(5), end=_dt(10))
        assert rng.contains(_dt(5)) is True
        assert rng.contains(_dt(10)) is True
        assert rng.contains(_dt(4)) is False
        assert rng.contains(_dt(11)) is False

    def test_half_open_and_undated(self) -> None:
        assert DateRange(start=_dt(5)).contains(_dt(30)) is True
        assert DateRange(end=_dt(5)).contains(None) is False

    def test_naive_values_are_treated_as_utc(self) -> None:
        assert DateRange(start=_dt(5)).contains(datetime(2025, 6, 5)) is True


class TestSearchOptions:
    def test_clamped(self) -> None:
        opts = SearchOptions(sort_by=SearchSortBy.TITLE, limit=500, offset=-3).clamped(100)
        assert opts.limit == 100
        assert opts.offset == 0
        assert opts.sort_by == SearchSortBy.TITLE
        assert SearchOptions(limit=-1).clamped(100).limit == 0


class TestSearchFilters:
    def test_to_dict_only_set_filters(self) -> None:
        filters = SearchFilters(programme_id="DBS", material_type=MaterialType.NOTE)
        assert filters.to_dict() == {"programme_id": "DBS", "material_type": "note"}
        assert SearchFilters().to_dict() == {}


class TestExceptions:
    def test_base_default_error_code(self) -> None:
        exc = EduBridgeException("Something failed")
        assert exc.error_code == "EduBridgeException"
        assert exc.to_dict() == {
            "error": "EduBridgeException",
            "message": "Something failed",
            "details": {},
        }

    def test_validation_exception(self) -> None:
        exc = ValidationException("Invalid range", field="date_from")
        assert exc.error_code == "VALIDATION_ERROR"
        assert exc.details == {"field": "date_from"}

    def test_store_unavailable(self) -> None:
        exc = StoreUnavailableException()
        assert exc.error_code == "STORE_UNAVAILABLE"
        assert exc.details == {"store": "firestore"}
