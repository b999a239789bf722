"""
Tests for configuration.
"""

from unittest.mock import patch

import pytest

from heatmap_tracker.config import configure_logging, default_settings, validate_config


def test_defaults_are_valid():
    with patch("heatmap_tracker.config.WEEK_START_DAY", "1"), \
         patch("heatmap_tracker.config.SEPARATE_MONTHS", "true"), \
         patch("heatmap_tracker.config.LOG_LEVEL", "WARNING"):
        validate_config()

        settings = default_settings()

    assert settings.week_start_day == 1
    assert settings.separate_months is True
    assert settings.palettes["default"][0] == "#c6e48b"
    assert "danger" in settings.palettes


@patch("heatmap_tracker.config.SEPARATE_MONTHS", "No")
@patch("heatmap_tracker.config.WEEK_START_DAY", "0")
def test_values_from_environment():
    settings = default_settings()

    assert settings.week_start_day == 0
    assert settings.separate_months is False


@pytest.mark.parametrize("value", ["7", "-1", "monday", ""])
def test_invalid_week_start_day(value):
    with patch("heatmap_tracker.config.WEEK_START_DAY", value):
        with pytest.raises(ValueError, match="HEATMAP_WEEK_START_DAY"):
            validate_config()


@patch("heatmap_tracker.config.SEPARATE_MONTHS", "sometimes")
def test_invalid_separate_months():
    with pytest.raises(ValueError, match="HEATMAP_SEPARATE_MONTHS"):
        default_settings()


@patch("heatmap_tracker.config.LOG_LEVEL", "LOUD")
def test_invalid_log_level():
    with pytest.raises(ValueError, match="HEATMAP_LOG_LEVEL"):
        validate_config()


@patch("heatmap_tracker.config.LOG_LEVEL", "debug")
def test_configure_logging_uses_level():
    with patch("heatmap_tracker.config.logging.basicConfig") as mock_basic_config:
        configure_logging()

    assert mock_basic_config.call_args.kwargs["level"] == "DEBUG"
