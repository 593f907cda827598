"""Settings validation."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.search_default_limit == 20
    assert settings.search_max_limit == 100
    assert settings.cache_ttl_subjects == 900
    assert settings.highlight_open_tag == "<mark>"


def test_default_limit_above_max_is_rejected() -> None:
    with pytest.raises(ValidationError, match="SEARCH_DEFAULT_LIMIT"):
        Settings(_env_file=None, search_default_limit=200, search_max_limit=100)


def test_unknown_exporter_is_rejected() -> None:
    with pytest.raises(ValidationError, match="telemetry_exporter"):
        Settings(_env_file=None, telemetry_exporter="jaeger")


def test_otlp_requires_endpoint() -> None:
    with pytest.raises(ValidationError, match="TELEMETRY_OTLP_ENDPOINT"):
        Settings(_env_file=None, telemetry_exporter="otlp")


def test_firestore_configured() -> None:
    assert Settings(_env_file=None).firestore_configured is False
    assert Settings(_env_file=None, firebase_service_account_path="/tmp/key.json").firestore_configured is True
