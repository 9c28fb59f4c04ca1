"""Tests for runtime settings validation."""

import pytest

from shopstats.analytics import DuplicateKeyPolicy
from shopstats.config import AppSettings, SettingsLoadError, config_load_settings


def test_config_settings_defaults_are_valid(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Load defaults when no environment overrides are set.

    Returns:
        None: Assertions validate default policy values.

    Raises:
        AssertionError: Raised when defaults drift.
    """

    monkeypatch.chdir(tmp_path)
    for variable in ("DATASET_PATH", "LOG_LEVEL", "AVERAGE_PRICE_SCALE", "AVERAGE_PRICE_ROUNDING", "DUPLICATE_EMAIL_POLICY"):
        monkeypatch.delenv(variable, raising=False)

    settings = config_load_settings()

    assert settings.dataset_path == "data/shop.json"
    assert settings.log_level == "INFO"
    assert settings.average_price_scale == 2
    assert settings.average_price_rounding == "ROUND_HALF_UP"
    assert settings.duplicate_email_policy == DuplicateKeyPolicy.KEEP_LAST


def test_config_settings_reads_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATASET_PATH", " /tmp/shop.json ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("AVERAGE_PRICE_ROUNDING", "round_half_even")
    monkeypatch.setenv("DUPLICATE_EMAIL_POLICY", "error")

    settings = config_load_settings()

    assert settings.dataset_path == "/tmp/shop.json"
    assert settings.log_level == "DEBUG"
    assert settings.average_price_rounding == "ROUND_HALF_EVEN"
    assert settings.duplicate_email_policy == DuplicateKeyPolicy.ERROR


@pytest.mark.parametrize(
    ("variable", "value"),
    [
        ("LOG_LEVEL", "chatty"),
        ("AVERAGE_PRICE_ROUNDING", "ROUND_SIDEWAYS"),
        ("AVERAGE_PRICE_SCALE", "-1"),
        ("DUPLICATE_EMAIL_POLICY", "merge"),
        ("APPLICATION_PORT", "70000"),
    ],
)
def test_config_settings_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, variable: str, value: str) -> None:
    """Wrap validation failures into `SettingsLoadError`."""

    monkeypatch.setenv(variable, value)

    with pytest.raises(SettingsLoadError):
        config_load_settings()


def test_config_settings_accepts_explicit_keyword_values() -> None:
    settings = AppSettings(environment_name="test", average_price_scale=4, duplicate_email_policy="keep_first")

    assert settings.average_price_scale == 4
    assert settings.duplicate_email_policy == DuplicateKeyPolicy.KEEP_FIRST
