"""
SQLite-based storage for tracker entries and settings.

Keeps one tracker's entries plus the user settings (palettes, week start
day, display options) between runs of the CLI and the web API.
"""

import json
import os
import sqlite3
from logging import getLogger
from pathlib import Path

from heatmap_tracker.colors import merge_palettes
from heatmap_tracker.date_utils import format_iso, parse_date, utc_today
from heatmap_tracker.insights import get_builtin_insights
from heatmap_tracker.models import Entry, TrackerData, TrackerSettings

logger = getLogger(__name__)

TRACKER_OPTIONS_KEY = "tracker_options"

SETTING_KEYS = ("week_start_day", "week_display_mode", "separate_months", "language")


def _get_default_db_path() -> Path:
    """Get the default database path."""
    env_path = os.environ.get("HEATMAP_TRACKER_DB_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".heatmap-tracker" / "tracker.db"


def _dump(value) -> str | None:
    return None if value is None else json.dumps(value)


def _load(value: str | None):
    return None if value is None else json.loads(value)


class TrackerStorage:
    """SQLite-based storage for tracker entries and settings."""

    def __init__(self, db_path: str | Path | None = None):
        """
        Initialize the tracker storage.

        Args:
            db_path: Path to the SQLite database file.
                     Defaults to ~/.heatmap-tracker/tracker.db
        """
        if db_path is None:
            db_path = _get_default_db_path()
        self.db_path = Path(db_path)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        # Ensure parent directory exists
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    date TEXT PRIMARY KEY,
                    value REAL,
                    intensity REAL,
                    custom_color TEXT,
                    content TEXT,
                    metadata TEXT,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS palettes (
                    name TEXT PRIMARY KEY,
                    colors TEXT NOT NULL
                )
            """)
            conn.commit()

    def save_entries(self, entries: list[Entry]) -> int:
        """
        Save entries, replacing any stored entry for the same date.

        Entries with an invalid date are skipped.

        Args:
            entries: Entries to store

        Returns:
            Number of entries written
        """
        written = 0
        with sqlite3.connect(self.db_path) as conn:
            for entry in entries:
                entry_date = format_iso(parse_date(entry.date))

                # Skip entries with unusable dates
                if entry_date is None:
                    logger.debug("Not saving entry with invalid date %r", entry.date)
                    continue

                conn.execute(
                    """
                    INSERT INTO entries
                        (date, value, intensity, custom_color, content, metadata, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(date) DO UPDATE SET
                        value = excluded.value,
                        intensity = excluded.intensity,
                        custom_color = excluded.custom_color,
                        content = excluded.content,
                        metadata = excluded.metadata,
                        updated_at = excluded.updated_at
                    """,
                    (
                        entry_date,
                        entry.value,
                        entry.intensity,
                        entry.custom_color,
                        _dump(entry.content),
                        _dump(entry.metadata),
                    ),
                )
                written += 1

            conn.commit()

        logger.info("Saved %d entries to %s", written, self.db_path)
        return written

    def get_entries(self, year: int | None = None) -> list[Entry]:
        """
        Retrieve stored entries sorted by date ascending.

        Args:
            year: Only return entries of this year (optional)

        Returns:
            List of entries
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row

            if year is not None:
                rows = conn.execute(
                    """
                    SELECT date, value, intensity, custom_color, content, metadata
                    FROM entries
                    WHERE date >= ? AND date <= ?
                    ORDER BY date
                    """,
                    (f"{year:04d}-01-01", f"{year:04d}-12-31"),
                ).fetchall()
            else:
                rows = conn.execute(
                    """
                    SELECT date, value, intensity, custom_color, content, metadata
                    FROM entries
                    ORDER BY date
                    """,
                ).fetchall()

        return [
            Entry(
                date=row["date"],
                value=row["value"],
                intensity=row["intensity"],
                custom_color=row["custom_color"],
                content=_load(row["content"]),
                metadata=_load(row["metadata"]),
            )
            for row in rows
        ]

    def delete_entry(self, entry_date: str) -> bool:
        """
        Delete the entry for a date.

        Returns:
            True if an entry was deleted
        """
        normalized = format_iso(parse_date(entry_date))
        if normalized is None:
            return False

        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM entries WHERE date = ?", (normalized,))
            conn.commit()
        return cursor.rowcount > 0

    def clear(self) -> None:
        """Delete all entries from the database. Primarily for testing."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM entries")
            conn.commit()

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        """
        Get a setting value by key.

        Args:
            key: The setting key
            default: Default value if key doesn't exist

        Returns:
            The setting value or default
        """
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?",
                (key,),
            ).fetchone()
        return row[0] if row else default

    def set_setting(self, key: str, value: str) -> None:
        """
        Set a setting value (upserts).

        Args:
            key: The setting key
            value: The value to store
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO settings (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
            conn.commit()

    def get_palettes(self) -> dict[str, list[str]]:
        """Get the user-defined palettes (without the built-in ones)."""
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute("SELECT name, colors FROM palettes ORDER BY name").fetchall()
        return {name: json.loads(colors) for name, colors in rows}

    def save_palette(self, name: str, colors: list[str]) -> None:
        """Add or replace a named palette."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO palettes (name, colors) VALUES (?, ?)
                ON CONFLICT(name) DO UPDATE SET colors = excluded.colors
                """,
                (name, json.dumps(list(colors))),
            )
            conn.commit()

    def load_settings(self, defaults: TrackerSettings) -> TrackerSettings:
        """
        Merge stored settings over the defaults.

        Stored palettes are added on top of the built-in ones, so a user
        palette can replace a built-in but never remove it.

        Args:
            defaults: Settings from the environment

        Returns:
            TrackerSettings
        """
        stored = {
            key: json.loads(value)
            for key in SETTING_KEYS
            if (value := self.get_setting(key)) is not None
        }

        palettes = merge_palettes(defaults.palettes)
        palettes.update(self.get_palettes())

        return TrackerSettings(
            palettes=palettes,
            week_start_day=stored.get("week_start_day", defaults.week_start_day),
            week_display_mode=stored.get("week_display_mode", defaults.week_display_mode),
            separate_months=stored.get("separate_months", defaults.separate_months),
            language=stored.get("language", defaults.language),
            view_tabs_visibility=dict(defaults.view_tabs_visibility),
        )

    def save_settings(self, **values) -> None:
        """Store setting overrides, e.g. save_settings(week_start_day=0)."""
        for key, value in values.items():
            if key not in SETTING_KEYS:
                raise KeyError(f"Unknown setting: {key}")
            self.set_setting(key, json.dumps(value))

    def get_tracker_options(self) -> dict:
        """Get the stored tracker options (color scheme, intensity config, ...)."""
        value = self.get_setting(TRACKER_OPTIONS_KEY)
        return json.loads(value) if value else {}

    def set_tracker_options(self, options: dict) -> None:
        self.set_setting(TRACKER_OPTIONS_KEY, json.dumps(options))

    def load_tracker(self, year: int | None = None) -> TrackerData:
        """
        Build tracker data from the stored options and all stored entries.

        Args:
            year: Year to display. Defaults to the current UTC year.

        Returns:
            TrackerData
        """
        options = self.get_tracker_options()
        tracker = TrackerData.from_dict(
            {**options, "entries": self.get_entries(), "insights": []},
            default_year=utc_today().year,
        )
        if year is not None:
            tracker.year = year
        tracker.insights = get_builtin_insights(options.get("insights", []))
        return tracker
