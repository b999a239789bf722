"""
Configuration management for heatmap-tracker.

Loads defaults from environment variables (or a .env file).
"""

import logging
import os

from dotenv import load_dotenv

from heatmap_tracker.colors import DEFAULT_PALETTES
from heatmap_tracker.models import TrackerSettings

# Load .env file from project root
load_dotenv()

DB_PATH = os.getenv("HEATMAP_TRACKER_DB_PATH")
WEEK_START_DAY = os.getenv("HEATMAP_WEEK_START_DAY", "1")
SEPARATE_MONTHS = os.getenv("HEATMAP_SEPARATE_MONTHS", "true")
LOG_LEVEL = os.getenv("HEATMAP_LOG_LEVEL", "WARNING")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


def validate_config():
    """Validate that configuration values are usable."""
    invalid = []

    if not WEEK_START_DAY.strip().isdigit() or not 0 <= int(WEEK_START_DAY) <= 6:
        invalid.append("HEATMAP_WEEK_START_DAY (expected 0-6)")

    if SEPARATE_MONTHS.strip().lower() not in _TRUE_VALUES | _FALSE_VALUES:
        invalid.append("HEATMAP_SEPARATE_MONTHS (expected true/false)")

    if not isinstance(logging.getLevelName(LOG_LEVEL.upper()), int):
        invalid.append("HEATMAP_LOG_LEVEL (expected DEBUG, INFO, WARNING or ERROR)")

    if invalid:
        raise ValueError(
            f"Invalid configuration: {', '.join(invalid)}\n"
            "Check your environment or .env file."
        )


def default_settings() -> TrackerSettings:
    """
    Build settings from the environment.

    Returns:
        TrackerSettings with the built-in palettes

    Raises:
        ValueError: If the configuration is invalid
    """
    validate_config()
    return TrackerSettings(
        palettes={name: list(colors) for name, colors in DEFAULT_PALETTES.items()},
        week_start_day=int(WEEK_START_DAY),
        separate_months=_parse_bool(SEPARATE_MONTHS),
    )


def configure_logging() -> None:
    """Set up root logging for the console entry point."""
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
