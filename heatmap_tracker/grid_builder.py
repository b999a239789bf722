"""
Grid builder for the yearly heatmap.

Produces the flat, ordered list of cells the renderer lays out column by
column (one column per week, one row per weekday).
"""

import numbers
from datetime import date

from heatmap_tracker.date_utils import (
    MONTHS_SHORT,
    WEEKDAYS_SHORT,
    HeatmapValueError,
    date_from_day_of_year,
    days_in_year,
    empty_days_before_year_start,
    format_iso,
    is_same_date,
    month_tag,
    shifted_weekdays,
    utc_today,
)
from heatmap_tracker.models import WEEK_DISPLAY_MODES, Cell, Entry, TrackerData

# A month gap is one full week so later weeks stay aligned.
MONTH_GAP_CELLS = 7

FILLER_CELL = Cell(is_space_between_box=True)


def prefilled_cells(count: int) -> list[Cell]:
    """
    Create filler cells.

    Raises:
        HeatmapValueError: If count is not a non-negative whole number
    """
    if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 0:
        raise HeatmapValueError(
            f"filler cell count must be a non-negative whole number, got {count!r}"
        )
    return [FILLER_CELL] * count


def _background_color(entry: Entry, colors: list[str]) -> str | None:
    if entry.custom_color:
        return entry.custom_color
    if entry.intensity is not None and 1 <= entry.intensity <= len(colors):
        return colors[int(entry.intensity) - 1]
    return None


def build_grid(
    year: int,
    intensity_map: dict[int, Entry],
    colors: list[str],
    tracker: TrackerData,
    week_start_day: int,
    today: date | None = None,
) -> list[Cell]:
    """
    Build the cells for one year.

    Args:
        year: Year to draw
        intensity_map: Day of year -> entry with derived intensity,
            from fill_entries_with_intensity()
        colors: Active color ramp
        tracker: Tracker data (show_current_day_border, separate_months)
        week_start_day: First weekday of each column (0 = Sunday)
        today: Override today's date for testing. Defaults to UTC today.

    Returns:
        Leading filler cells, then one cell per day of the year, with a
        week of filler cells before each month after January when months
        are separated
    """
    if today is None:
        today = utc_today()

    cells = prefilled_cells(empty_days_before_year_start(year, week_start_day))

    for day in range(1, days_in_year(year) + 1):
        current_date = date_from_day_of_year(year, day)

        # No gap before January
        if tracker.separate_months and current_date.month > 1 and current_date.day == 1:
            cells.extend(prefilled_cells(MONTH_GAP_CELLS))

        is_today = is_same_date(current_date, today)
        entry = intensity_map.get(day)

        if entry is not None:
            cell = Cell(
                date=format_iso(current_date),
                background_color=_background_color(entry, colors),
                content=entry.content,
                metadata=entry.metadata,
                is_today=is_today,
                show_border=is_today and tracker.show_current_day_border,
                has_data=True,
                name=month_tag(current_date),
            )
        else:
            cell = Cell(
                date=format_iso(current_date),
                is_today=is_today,
                show_border=is_today and tracker.show_current_day_border,
                has_data=False,
                name=month_tag(current_date),
            )

        cells.append(cell)

    return cells


def weekday_labels(week_start_day: int, week_display_mode: str = "all") -> list[str]:
    """
    Get the weekday row labels, rotated to the week start day.

    Hidden rows get an empty label: "all" shows every row, "none" hides
    every row, "odd" shows rows 1, 3, 5, 7 and "even" shows rows 2, 4, 6.
    """
    if week_display_mode not in WEEK_DISPLAY_MODES:
        raise HeatmapValueError(
            f"week_display_mode must be one of {', '.join(WEEK_DISPLAY_MODES)}"
        )

    labels = shifted_weekdays(WEEKDAYS_SHORT, week_start_day)

    if week_display_mode == "all":
        return labels
    if week_display_mode == "none":
        return [""] * len(labels)

    keep_remainder = 0 if week_display_mode == "odd" else 1
    return [
        label if index % 2 == keep_remainder else ""
        for index, label in enumerate(labels)
    ]


def month_labels() -> list[str]:
    return list(MONTHS_SHORT)
