"""
Select the entries that belong to one calendar year.
"""

from logging import getLogger

from heatmap_tracker.date_utils import parse_date
from heatmap_tracker.models import Entry

logger = getLogger(__name__)


def entries_for_year(entries: list[Entry], year: int) -> list[Entry]:
    """
    Filter entries down to a single year.

    Entries with an unparseable date are dropped. Input order is kept.

    Args:
        entries: All tracker entries
        year: Calendar year to keep

    Returns:
        Entries whose UTC date falls in the given year
    """
    year_entries = []
    dropped = 0

    for entry in entries:
        entry_date = parse_date(entry.date)
        if entry_date is None:
            dropped += 1
            continue
        if entry_date.year == year:
            year_entries.append(entry)

    if dropped:
        logger.debug("Dropped %d entries with invalid dates", dropped)

    return year_entries
