"""coerce_datetime over the timestamp shapes found in stored documents."""

from datetime import datetime, timedelta, timezone

from app.shared.utils.datetime import coerce_datetime, ensure_utc


def test_datetime_passthrough_normalised_to_utc() -> None:
    naive = datetime(2025, 5, 1, 8, 0)
    assert coerce_datetime(naive) == datetime(2025, 5, 1, 8, 0, tzinfo=timezone.utc)
    plus8 = datetime(2025, 5, 1, 8, 0, tzinfo=timezone(timedelta(hours=8)))
    assert coerce_datetime(plus8) == datetime(2025, 5, 1, 0, 0, tzinfo=timezone.utc)


def test_iso_string() -> None:
    assert coerce_datetime("2025-05-01T00:00:00Z") == datetime(2025, 5, 1, tzinfo=timezone.utc)


def test_millisecond_number() -> None:
    assert coerce_datetime(1_700_000_000_000) == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)


def test_seconds_nanoseconds_map() -> None:
    value = {"seconds": 1_700_000_000, "nanoseconds": 500_000_000}
    assert coerce_datetime(value) == datetime.fromtimestamp(1_700_000_000.5, tz=timezone.utc)


def test_unparseable_values_are_none() -> None:
    for value in (None, True, "not a date", {"foo": 1}, [1, 2]):
        assert coerce_datetime(value) is None


def test_ensure_utc_none() -> None:
    assert ensure_utc(None) is None
