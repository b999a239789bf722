"""
Tests for CLI display functions.
"""

import io
from contextlib import redirect_stdout

from heatmap_tracker.cli import (
    cell_symbol,
    display_heatmap,
    display_legend,
    display_stats,
    display_streak,
    get_milestone_message,
)
from heatmap_tracker.heatmap import HeatmapView, LegendItem, StatisticsSummary
from heatmap_tracker.models import Cell, StreakResult

COLORS = ["#a", "#b", "#c"]


def _summary(current=0, longest=0, insights=None):
    streaks = StreakResult(current_streak=current, longest_streak=longest)
    return StatisticsSummary(
        year=2024,
        tracking_days_this_year=12,
        total_tracking_days=40,
        streaks=streaks,
        current_streak_label=str(current),
        longest_streak_label=str(longest),
        insights=insights or {},
    )


def _capture(func, *args) -> str:
    output = io.StringIO()
    with redirect_stdout(output):
        func(*args)
    return output.getvalue()


class TestGetMilestoneMessage:
    """Tests for milestone messages."""

    def test_7_day_milestone(self):
        assert get_milestone_message(7) == "One week strong!"

    def test_30_day_milestone(self):
        assert get_milestone_message(30) == "One month champion!"

    def test_365_day_milestone(self):
        assert get_milestone_message(365) == "A whole year!"

    def test_no_milestone(self):
        assert get_milestone_message(5) is None
        assert get_milestone_message(99) is None


class TestCellSymbol:
    """Tests for cell symbols."""

    def test_filler(self):
        assert cell_symbol(Cell(is_space_between_box=True), COLORS) == " "

    def test_no_data(self):
        assert cell_symbol(Cell(date="2024-01-01"), COLORS) == "."

    def test_ramp_color(self):
        cell = Cell(date="2024-01-01", has_data=True, background_color="#c")
        assert cell_symbol(cell, COLORS) == "3"

    def test_custom_color(self):
        cell = Cell(date="2024-01-01", has_data=True, background_color="#ff0000")
        assert cell_symbol(cell, COLORS) == "*"


class TestDisplayHeatmap:
    """Tests for heatmap display."""

    def test_rows_follow_weekdays(self):
        cells = [
            Cell(is_space_between_box=True),
            Cell(date="2024-01-01", has_data=True, background_color="#a"),
            Cell(date="2024-01-02", is_today=True),
        ]
        view = HeatmapView(
            year=2024,
            title="Reading",
            subtitle="Pages per day",
            colors=COLORS,
            cells=cells,
            weekday_labels=["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
            month_labels=[],
        )

        lines = _capture(display_heatmap, view).splitlines()

        assert lines[0] == "Reading"
        assert lines[1] == "Pages per day"
        assert lines[2].rstrip() == "Sun"
        assert lines[3] == "Mon  1"
        assert lines[4] == "Tue [.]"

    def test_title_falls_back_to_year(self):
        view = HeatmapView(
            year=2024, title=None, subtitle=None, colors=COLORS, cells=[],
            weekday_labels=[""] * 7, month_labels=[],
        )

        assert _capture(display_heatmap, view).splitlines()[0] == "2024"


class TestDisplayStreak:
    """Tests for streak display."""

    def test_no_active_streak(self):
        result = _capture(display_streak, _summary(current=0, longest=4))

        assert "No active streak" in result
        assert "Longest streak: 4" in result

    def test_active_streak(self):
        result = _capture(display_streak, _summary(current=3, longest=3))

        assert "Current Streak: 3" in result
        assert " - " not in result.splitlines()[0]

    def test_milestone(self):
        result = _capture(display_streak, _summary(current=7, longest=7))

        assert "Current Streak: 7 - One week strong!" in result


def test_display_stats():
    result = _capture(display_stats, _summary(insights={"Total Value": "15"}))

    assert "Tracking days in 2024: 12" in result
    assert "Total tracking days: 40" in result
    assert "Total Value: 15" in result


def test_display_legend():
    legend = [LegendItem(color="#a", intensity=1, min=0, max=2.5)]

    result = _capture(display_legend, legend)

    assert "Legend:" in result
    assert "1  #a  0.00 - 2.50" in result
