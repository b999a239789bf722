"""
Run the heatmap pipeline for one tracker.

Ties the pieces together: year filter, color resolution, intensity
buckets, grid cells, legend and statistics. Every call recomputes from
scratch; nothing is cached between calls.
"""

from dataclasses import asdict, dataclass, field, replace
from datetime import date

from heatmap_tracker.colors import merge_palettes, resolve_colors
from heatmap_tracker.entry_filter import entries_for_year
from heatmap_tracker.grid_builder import build_grid, month_labels, weekday_labels
from heatmap_tracker.insights import process_insights
from heatmap_tracker.intensity import (
    fill_entries_with_intensity,
    intensities_info,
    raw_intensities,
)
from heatmap_tracker.models import Cell, Entry, StreakResult, TrackerData, TrackerSettings
from heatmap_tracker.streak_calculator import calculate_streaks, format_streak


@dataclass
class HeatmapView:
    """Everything a renderer needs to draw one year."""

    year: int
    title: str | None
    subtitle: str | None
    colors: list[str]
    cells: list[Cell]
    weekday_labels: list[str]
    month_labels: list[str]
    year_entries: list[Entry] = field(default_factory=list)
    entries_by_day: dict[int, Entry] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "title": self.title,
            "subtitle": self.subtitle,
            "colors": self.colors,
            "weekday_labels": self.weekday_labels,
            "month_labels": self.month_labels,
            "cells": [cell.to_dict() for cell in self.cells],
        }


@dataclass(frozen=True)
class LegendItem:
    color: str
    intensity: int
    min: float
    max: float


@dataclass
class StatisticsSummary:
    """Numbers shown on the statistics view."""

    year: int
    tracking_days_this_year: int
    total_tracking_days: int
    streaks: StreakResult
    current_streak_label: str
    longest_streak_label: str
    insights: dict[str, str | int | float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


def merge_tracker_data(tracker: TrackerData, settings: TrackerSettings) -> TrackerData:
    """Fill tracker options left unset from the user settings."""
    if tracker.separate_months is None:
        return replace(tracker, separate_months=settings.separate_months)
    return tracker


def build_heatmap(
    tracker: TrackerData,
    settings: TrackerSettings,
    today: date | None = None,
) -> HeatmapView:
    """
    Build the grid for the tracker's year.

    Args:
        tracker: Tracker data with entries and per-heatmap options
        settings: User settings (palettes, week start, display mode)
        today: Override today's date for testing

    Returns:
        HeatmapView with resolved colors, cells and header labels

    Raises:
        HeatmapValueError: If the year or week start day is invalid
    """
    tracker = merge_tracker_data(tracker, settings)
    colors = resolve_colors(tracker.color_scheme, merge_palettes(settings.palettes))

    year_entries = entries_for_year(tracker.entries, tracker.year)
    entries_by_day = fill_entries_with_intensity(
        year_entries, tracker.intensity_config, colors
    )
    cells = build_grid(
        tracker.year,
        entries_by_day,
        colors,
        tracker,
        settings.week_start_day,
        today=today,
    )

    return HeatmapView(
        year=tracker.year,
        title=tracker.heatmap_title,
        subtitle=tracker.heatmap_subtitle,
        colors=colors,
        cells=cells,
        weekday_labels=weekday_labels(settings.week_start_day, settings.week_display_mode),
        month_labels=month_labels(),
        year_entries=year_entries,
        entries_by_day=entries_by_day,
    )


def build_legend(tracker: TrackerData, settings: TrackerSettings) -> list[LegendItem]:
    """
    Pair each ramp color with the value range it stands for.

    Ranges are derived from the same year's entries the grid uses, so the
    legend always matches the cells.
    """
    colors = resolve_colors(tracker.color_scheme, merge_palettes(settings.palettes))
    year_entries = entries_for_year(tracker.entries, tracker.year)
    ranges = intensities_info(
        raw_intensities(year_entries), tracker.intensity_config, colors
    )
    return [
        LegendItem(color=color, intensity=r.intensity, min=r.min, max=r.max)
        for color, r in zip(colors, ranges)
    ]


def build_statistics(
    tracker: TrackerData,
    settings: TrackerSettings,
    today: date | None = None,
) -> StatisticsSummary:
    """
    Calculate the statistics view for a tracker.

    Streaks are computed over all entries, not just the selected year.
    Insights run over the selected year's entries with derived intensities.

    Args:
        tracker: Tracker data
        settings: User settings
        today: Override today's date for testing

    Returns:
        StatisticsSummary
    """
    view = build_heatmap(tracker, settings, today=today)
    streaks = calculate_streaks(tracker.entries, today=today)

    return StatisticsSummary(
        year=view.year,
        tracking_days_this_year=len(view.entries_by_day),
        total_tracking_days=len(tracker.entries),
        streaks=streaks,
        current_streak_label=format_streak(
            streaks.current_streak,
            streaks.current_streak_start_date,
            streaks.current_streak_end_date,
        ),
        longest_streak_label=format_streak(
            streaks.longest_streak,
            streaks.longest_streak_start_date,
            streaks.longest_streak_end_date,
        ),
        insights=process_insights(tracker.insights, list(view.entries_by_day.values())),
    )
