"""
Calculate streaks of consecutive days with entries.
"""

from datetime import date

from heatmap_tracker.date_utils import format_iso, parse_date, utc_today
from heatmap_tracker.models import Entry, StreakResult


def calculate_streaks(entries: list[Entry], today: date | None = None) -> StreakResult:
    """
    Calculate current and longest streaks from tracker entries.

    A streak is a run of calendar-consecutive days with at least one entry.
    Several entries on the same day count once. The current streak is the
    run ending at the latest entry, and it stays alive while that entry is
    from today or yesterday; with a gap of two days or more it has lapsed.

    Args:
        entries: Entries in any order. Entries with invalid dates are ignored.
        today: Override today's date for testing. Defaults to UTC today.

    Returns:
        StreakResult with streak lengths and ISO start/end dates
    """
    entry_dates = sorted(
        {d for d in (parse_date(entry.date) for entry in entries) if d is not None}
    )

    # Handle empty input
    if not entry_dates:
        return StreakResult()

    if today is None:
        today = utc_today()

    run_start = entry_dates[0]
    run_length = 1

    longest_streak = 1
    longest_start = longest_end = entry_dates[0]

    for previous_date, current_date in zip(entry_dates, entry_dates[1:]):
        if (current_date - previous_date).days == 1:
            run_length += 1
        else:
            run_length = 1
            run_start = current_date

        if run_length > longest_streak:
            longest_streak = run_length
            longest_start = run_start
            longest_end = current_date

    last_date = entry_dates[-1]

    # Streak lapses once a whole day passes without an entry
    if (today - last_date).days > 1:
        current_streak = 0
        current_start = current_end = None
    else:
        current_streak = run_length
        current_start, current_end = run_start, last_date

    return StreakResult(
        current_streak=current_streak,
        longest_streak=longest_streak,
        current_streak_start_date=format_iso(current_start),
        current_streak_end_date=format_iso(current_end),
        longest_streak_start_date=format_iso(longest_start),
        longest_streak_end_date=format_iso(longest_end),
    )


def format_streak(streak: int, start_date: str | None, end_date: str | None) -> str:
    """
    Format a streak for display, e.g. "3 (2023-01-01 - 2023-01-03)".

    Args:
        streak: Streak length in days
        start_date: First day of the streak, or None
        end_date: Last day of the streak, or None

    Returns:
        Streak length, followed by its date range when known
    """
    if not start_date or not end_date:
        return f"{streak}"
    return f"{streak} ({start_date} - {end_date})"
