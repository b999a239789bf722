"""Tests for the tracker storage module."""

import tempfile
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from heatmap_tracker.models import Entry, TrackerSettings
from heatmap_tracker.storage import TrackerStorage


@pytest.fixture
def temp_db():
    """Create a temporary database file for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture
def storage(temp_db):
    """Create a TrackerStorage instance with a temporary database."""
    return TrackerStorage(temp_db)


@pytest.fixture
def sample_entries():
    return [
        Entry(date="2024-01-02", value=3, content="second"),
        Entry(date="2023-12-31", value=1, metadata={"documentCount": 2}),
        Entry(date="2024-01-01", value=5, custom_color="#ff0000"),
    ]


class TestDatabaseInitialization:
    """Tests for database initialization."""

    def test_creates_db_file(self, temp_db):
        """Database file is created on initialization."""
        if temp_db.exists():
            temp_db.unlink()

        TrackerStorage(temp_db)
        assert temp_db.exists()

    def test_creates_parent_directories(self):
        """Parent directories are created if they don't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "subdir" / "nested" / "tracker.db"
            TrackerStorage(db_path)
            assert db_path.exists()

    def test_initialization_is_idempotent(self, temp_db):
        TrackerStorage(temp_db)
        storage = TrackerStorage(temp_db)
        assert storage.get_entries() == []

    def test_db_path_from_environment(self, tmp_path, monkeypatch):
        db_path = tmp_path / "env" / "tracker.db"
        monkeypatch.setenv("HEATMAP_TRACKER_DB_PATH", str(db_path))

        storage = TrackerStorage()

        assert storage.db_path == db_path
        assert db_path.exists()


class TestEntries:
    """Tests for saving and reading entries."""

    def test_save_and_get_sorted(self, storage, sample_entries):
        assert storage.save_entries(sample_entries) == 3

        entries = storage.get_entries()

        assert [e.date for e in entries] == ["2023-12-31", "2024-01-01", "2024-01-02"]

    def test_fields_round_trip(self, storage, sample_entries):
        storage.save_entries(sample_entries)

        by_date = {e.date: e for e in storage.get_entries()}

        assert by_date["2024-01-02"].content == "second"
        assert by_date["2023-12-31"].metadata == {"documentCount": 2}
        assert by_date["2024-01-01"].custom_color == "#ff0000"
        assert by_date["2024-01-01"].value == 5

    def test_filter_by_year(self, storage, sample_entries):
        storage.save_entries(sample_entries)

        assert [e.date for e in storage.get_entries(year=2024)] == ["2024-01-01", "2024-01-02"]
        assert [e.date for e in storage.get_entries(year=2023)] == ["2023-12-31"]
        assert storage.get_entries(year=2022) == []

    def test_same_date_is_replaced(self, storage):
        storage.save_entries([Entry(date="2024-03-01", value=1)])
        storage.save_entries([Entry(date="2024-03-01", value=7)])

        entries = storage.get_entries()

        assert len(entries) == 1
        assert entries[0].value == 7

    def test_dates_are_normalized(self, storage):
        storage.save_entries([Entry(date="2024-03-01T12:00:00Z", value=2)])

        assert storage.get_entries()[0].date == "2024-03-01"

    def test_invalid_dates_are_skipped(self, storage):
        written = storage.save_entries([Entry(date="bad"), Entry(date="2024-03-01")])

        assert written == 1
        assert len(storage.get_entries()) == 1

    def test_delete_entry(self, storage, sample_entries):
        storage.save_entries(sample_entries)

        assert storage.delete_entry("2024-01-01") is True
        assert storage.delete_entry("2024-01-01") is False
        assert storage.delete_entry("nope") is False
        assert len(storage.get_entries()) == 2

    def test_clear(self, storage, sample_entries):
        storage.save_entries(sample_entries)
        storage.clear()

        assert storage.get_entries() == []


class TestSettings:
    """Tests for settings and palettes."""

    def test_get_setting_default(self, storage):
        assert storage.get_setting("missing") is None
        assert storage.get_setting("missing", "fallback") == "fallback"

    def test_set_setting_upserts(self, storage):
        storage.set_setting("language", '"en"')
        storage.set_setting("language", '"de"')

        assert storage.get_setting("language") == '"de"'

    def test_palettes(self, storage):
        storage.save_palette("warm", ["#111", "#222"])
        storage.save_palette("warm", ["#333"])

        assert storage.get_palettes() == {"warm": ["#333"]}

    def test_load_settings_uses_defaults(self, storage):
        settings = storage.load_settings(TrackerSettings(week_start_day=3))

        assert settings.week_start_day == 3
        assert settings.week_display_mode == "even"
        assert "default" in settings.palettes

    def test_load_settings_applies_stored_values(self, storage):
        storage.save_settings(week_start_day=0, separate_months=False, week_display_mode="all")
        storage.save_palette("warm", ["#111"])
        storage.save_palette("danger", ["#f00"])

        settings = storage.load_settings(TrackerSettings())

        assert settings.week_start_day == 0
        assert settings.separate_months is False
        assert settings.week_display_mode == "all"
        assert settings.palettes["warm"] == ["#111"]
        assert settings.palettes["danger"] == ["#f00"]
        assert settings.palettes["default"][0] == "#c6e48b"

    def test_save_unknown_setting_raises(self, storage):
        with pytest.raises(KeyError):
            storage.save_settings(theme="dark")


class TestTracker:
    """Tests for tracker options."""

    def test_options_default_empty(self, storage):
        assert storage.get_tracker_options() == {}

    def test_options_round_trip(self, storage):
        options = {"heatmapTitle": "Reading", "colorScheme": {"paletteName": "danger"}}
        storage.set_tracker_options(options)

        assert storage.get_tracker_options() == options

    def test_load_tracker(self, storage, sample_entries):
        storage.save_entries(sample_entries)
        storage.set_tracker_options(
            {
                "heatmap_title": "Reading",
                "color_scheme": {"palette_name": "danger"},
                "intensity_config": {"scale_start": 0, "scale_end": 10},
                "insights": ["total_value"],
            }
        )

        tracker = storage.load_tracker(2024)

        assert tracker.year == 2024
        assert len(tracker.entries) == 3
        assert tracker.heatmap_title == "Reading"
        assert tracker.color_scheme.palette_name == "danger"
        assert tracker.intensity_config.scale_end == 10
        assert [i.name for i in tracker.insights] == ["Total Value"]

    @patch("heatmap_tracker.storage.utc_today")
    def test_load_tracker_defaults_to_current_year(self, mock_today, storage):
        mock_today.return_value = date(2031, 5, 5)

        assert storage.load_tracker().year == 2031

    def test_stored_year_option_is_used(self, storage):
        storage.set_tracker_options({"year": 2020})

        assert storage.load_tracker().year == 2020
        assert storage.load_tracker(2021).year == 2021
