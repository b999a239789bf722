"""
Insights: named metrics computed over a year's entries.

Each insight is a plain function of the entry list. Callers pick the
built-in ones by key or register their own.
"""

from collections import Counter

from heatmap_tracker.date_utils import parse_date
from heatmap_tracker.models import Entry, Insight

NO_DATA = "No data"

WEEKDAYS_LONG = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]


def _format_number(number: float) -> str:
    if float(number).is_integer():
        return str(int(number))
    return str(number)


def most_active_day(entries: list[Entry]) -> str:
    """Weekday with the most entries. Ties go to the weekday seen first."""
    day_counts: dict[str, int] = {}
    for entry in entries:
        entry_date = parse_date(entry.date)
        if entry_date is None:
            continue
        day = WEEKDAYS_LONG[entry_date.weekday()]
        day_counts[day] = day_counts.get(day, 0) + 1

    best_day, best_count = NO_DATA, 0
    for day, count in day_counts.items():
        if count > best_count:
            best_day, best_count = day, count
    return best_day


def total_value(entries: list[Entry]) -> str:
    return _format_number(sum(entry.value or 0 for entry in entries))


def average_value(entries: list[Entry]) -> str:
    """Mean raw value, two decimal places."""
    if not entries:
        return "0.00"
    total = sum(entry.value or 0 for entry in entries)
    return f"{total / len(entries):.2f}"


def most_frequent_intensity(entries: list[Entry]) -> str:
    """Most common intensity; ties go to the lowest intensity."""
    if not entries:
        return NO_DATA
    counts = Counter(entry.intensity or 0 for entry in entries)
    best = max(sorted(counts), key=lambda intensity: counts[intensity])
    return _format_number(best)


def highest_value_day(entries: list[Entry]) -> str:
    """Date of the entry with the highest value (first one on ties)."""
    if not entries:
        return NO_DATA
    best = entries[0]
    for entry in entries[1:]:
        if (entry.value or 0) > (best.value or 0):
            best = entry
    return best.date or NO_DATA


def intensity_distribution(entries: list[Entry]) -> str:
    """e.g. "Intensity 1: 3, Intensity 4: 1" """
    counts = Counter(entry.intensity or 0 for entry in entries)
    return ", ".join(
        f"Intensity {_format_number(intensity)}: {counts[intensity]}"
        for intensity in sorted(counts)
    )


BUILTIN_INSIGHTS: dict[str, Insight] = {
    "most_active_day": Insight("The most active day of the week", most_active_day),
    "total_value": Insight("Total Value", total_value),
    "average_value": Insight("Average Value", average_value),
    "most_frequent_intensity": Insight("Most Frequent Intensity", most_frequent_intensity),
    "highest_value_day": Insight("Day with the Highest Value", highest_value_day),
    "intensity_distribution": Insight("Intensity Distribution", intensity_distribution),
}


def get_builtin_insights(keys: list[str]) -> list[Insight]:
    """
    Look up built-in insights by key.

    Raises:
        KeyError: If a key does not name a built-in insight
    """
    return [BUILTIN_INSIGHTS[key] for key in keys]


def process_insights(
    insights: list[Insight], year_entries: list[Entry]
) -> dict[str, str | int | float]:
    """
    Run every insight over the year's entries.

    Args:
        insights: Insights to run, in display order
        year_entries: Entries of the selected year (with derived intensities)

    Returns:
        Mapping of insight name -> computed value
    """
    results: dict[str, str | int | float] = {}
    for insight in insights:
        results[insight.name] = insight.calculate(year_entries)
    return results
