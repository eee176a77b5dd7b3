import logging

import pytest
from pydantic import ValidationError

from fieldguard.settings import Settings


@pytest.mark.unit
def test_settings_defaults() -> None:
    settings = Settings.load()

    assert settings.allow_unknown is True
    assert settings.strip_unknown is False
    assert settings.app_name == "fieldguard"
    assert settings.environment == "testing"
    assert settings.is_production is False
    assert settings.logging_level == logging.INFO


@pytest.mark.unit
def test_settings_unknown_key_policy_from_env(monkeypatch) -> None:
    monkeypatch.setenv("FIELDGUARD_ALLOW_UNKNOWN", "false")
    monkeypatch.setenv("FIELDGUARD_STRIP_UNKNOWN", "1")

    settings = Settings.load()

    assert settings.allow_unknown is False
    assert settings.strip_unknown is True


@pytest.mark.unit
def test_settings_empty_env_value_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("FIELDGUARD_ALLOW_UNKNOWN", "")

    assert Settings.load().allow_unknown is True


@pytest.mark.unit
def test_settings_log_level_is_normalized(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")

    settings = Settings.load()

    assert settings.log_level == "WARNING"
    assert settings.logging_level == logging.WARNING


@pytest.mark.unit
def test_settings_rejects_unknown_log_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with pytest.raises(ValidationError, match="LOG_LEVEL"):
        Settings.load()


@pytest.mark.unit
def test_settings_is_production(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "Production")

    assert Settings.load().is_production is True


@pytest.mark.unit
def test_settings_are_frozen() -> None:
    settings = Settings.load()

    with pytest.raises(ValidationError):
        settings.allow_unknown = False  # type: ignore[misc]
