"""
CLI display functions for heatmap-tracker.
"""

from heatmap_tracker.heatmap import HeatmapView, LegendItem, StatisticsSummary
from heatmap_tracker.models import Cell

DAYS_PER_WEEK = 7


def get_milestone_message(streak_days: int) -> str | None:
    """
    Get milestone message for a given streak length.

    Args:
        streak_days: Current streak in days

    Returns:
        Milestone message string or None if no milestone
    """
    milestones = {
        7: "One week strong!",
        14: "Two weeks of consistency!",
        30: "One month champion!",
        100: "100 days - legendary!",
        365: "A whole year!",
    }
    return milestones.get(streak_days)


def cell_symbol(cell: Cell, colors: list[str]) -> str:
    """
    Get the one-character symbol for a grid cell.

    " " for fillers, "." for days without data, the 1-based color index for
    ramp colors and "*" for custom colors.
    """
    if cell.is_space_between_box:
        return " "
    if not cell.has_data or cell.background_color is None:
        return "."
    if cell.background_color in colors:
        return str(colors.index(cell.background_color) + 1)
    return "*"


def display_heatmap(view: HeatmapView) -> None:
    """
    Print the heatmap as text, one row per weekday and one column per week.

    Today's cell is wrapped in brackets.

    Args:
        view: HeatmapView from build_heatmap()
    """
    rows: list[list[str]] = [[] for _ in range(DAYS_PER_WEEK)]
    for index, cell in enumerate(view.cells):
        symbol = cell_symbol(cell, view.colors)
        rows[index % DAYS_PER_WEEK].append(f"[{symbol}]" if cell.is_today else f" {symbol} ")

    title = view.title or f"{view.year}"
    print(title)
    if view.subtitle:
        print(view.subtitle)

    for label, row in zip(view.weekday_labels, rows):
        print(f"{label:<4}{''.join(row).rstrip()}")
    print()


def display_streak(summary: StatisticsSummary) -> None:
    """
    Display streak information with milestone messages.

    Args:
        summary: StatisticsSummary from build_statistics()
    """
    current = summary.streaks.current_streak

    if current == 0:
        status = "No active streak"
    else:
        status = f"Current Streak: {summary.current_streak_label}"
        milestone = get_milestone_message(current)
        if milestone:
            status = f"{status} - {milestone}"

    print(f"🔥 {status}")
    print(f"   Longest streak: {summary.longest_streak_label}")
    print()


def display_stats(summary: StatisticsSummary) -> None:
    """
    Display tracking totals and insights.

    Args:
        summary: StatisticsSummary from build_statistics()
    """
    print("📊 Stats:")
    print(f"   Tracking days in {summary.year}: {summary.tracking_days_this_year}")
    print(f"   Total tracking days: {summary.total_tracking_days}")
    for name, value in summary.insights.items():
        print(f"   {name}: {value}")
    print()


def display_legend(legend: list[LegendItem]) -> None:
    """Print each color with its value range."""
    print("Legend:")
    for item in legend:
        print(
            f"   {item.intensity}  {item.color}  "
            f"{item.min:.2f} - {item.max:.2f}"
        )
    print()
