"""
Intensity normalization for heatmap cells.

Maps raw entry values of any scale onto the buckets of the active color
ramp. The value range is split into N equal-width buckets, where N is the
number of colors, and each entry is tagged with its 1-based bucket.
"""

import math
from dataclasses import replace
from logging import getLogger

from heatmap_tracker.date_utils import day_of_year, parse_date
from heatmap_tracker.models import Entry, IntensityConfig, IntensityRange

logger = getLogger(__name__)

# Range used when no entry carries a value.
DEFAULT_RANGE = (1, 5)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value into [minimum, maximum]. NaN passes through unchanged."""
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def map_range(
    current: float,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float,
) -> float:
    """
    Linearly remap a value from one range to another, clamped to the output.

    A degenerate input range (in_min == in_max) never raises: the result is
    NaN when current == in_min, otherwise the matching output bound.

    Examples:
        >>> map_range(5, 0, 10, 0, 100)
        50.0
        >>> math.isnan(map_range(5, 5, 5, 0, 100))
        True
    """
    numerator = (current - in_min) * (out_max - out_min)
    denominator = in_max - in_min

    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        mapped = math.copysign(math.inf, numerator)
    else:
        mapped = numerator / denominator + out_min

    return clamp(mapped, out_min, out_max)


def _raw_value(entry: Entry) -> float | None:
    # Older tracker definitions put the raw observation in `intensity`.
    return entry.value if entry.value is not None else entry.intensity


def raw_intensities(entries: list[Entry]) -> list[float]:
    """Collect the truthy raw values of the entries, in entry order."""
    return [raw for raw in map(_raw_value, entries) if raw]


def min_max_intensities(
    intensities: list[float], intensity_config: IntensityConfig
) -> tuple[float, float]:
    """
    Get the (start, end) of the value scale.

    Explicit scale bounds in the config win over the data-derived minimum
    and maximum. With no data the default range (1, 5) is used.
    """
    if intensities:
        minimum, maximum = min(intensities), max(intensities)
    else:
        minimum, maximum = DEFAULT_RANGE

    start = intensity_config.scale_start
    end = intensity_config.scale_end
    return (
        minimum if start is None else start,
        maximum if end is None else end,
    )


def bucket_ranges(
    number_of_buckets: int, start: float, end: float
) -> list[IntensityRange]:
    """
    Split [start, end] into equal-width buckets.

    The pair is treated as an unordered range, so bucket 1 always covers the
    low end. When start == end every bucket is the single point [start, start].

    Args:
        number_of_buckets: Number of buckets (the color ramp length)
        start: One end of the value scale
        end: The other end of the value scale

    Returns:
        Exactly number_of_buckets ranges tagged with intensities 1..N

    Examples:
        >>> [(r.min, r.max) for r in bucket_ranges(2, 0, 10)]
        [(0.0, 5.0), (5.0, 10.0)]
    """
    low, high = min(start, end), max(start, end)

    return [
        IntensityRange(
            min=map_range(i, 0, number_of_buckets, low, high),
            max=map_range(i + 1, 0, number_of_buckets, low, high),
            intensity=i + 1,
        )
        for i in range(number_of_buckets)
    ]


def assign_bucket(
    raw_value: float,
    ranges: list[IntensityRange],
    show_out_of_range: bool,
) -> int | None:
    """
    Find the bucket for a raw value.

    Values on a shared boundary go to the lower bucket. Values outside every
    bucket get no intensity unless show_out_of_range is set, in which case
    they are remapped onto [1, N] and clamped to the nearest end bucket.
    """
    for intensity_range in ranges:
        if intensity_range.min <= raw_value <= intensity_range.max:
            return intensity_range.intensity

    if not show_out_of_range or not ranges or math.isnan(raw_value):
        return None

    # A single bucket is the nearest one for every value
    if len(ranges) == 1:
        return 1

    mapped = map_range(raw_value, ranges[0].min, ranges[-1].max, 1, len(ranges))
    if math.isnan(mapped):
        return None
    # Round half up
    return math.floor(mapped + 0.5)


def intensities_info(
    intensities: list[float],
    intensity_config: IntensityConfig,
    colors: list[str],
) -> list[IntensityRange]:
    """Bucket ranges for the active color ramp."""
    start, end = min_max_intensities(intensities, intensity_config)
    return bucket_ranges(len(colors), start, end)


def fill_entries_with_intensity(
    entries: list[Entry],
    intensity_config: IntensityConfig,
    colors: list[str],
) -> dict[int, Entry]:
    """
    Tag every entry with its color bucket, keyed by day of the year.

    Entries without a value fall back to the configured default intensity.
    When two entries share a day, the later one wins.

    Args:
        entries: Entries of a single year
        intensity_config: Scale and out-of-range policy
        colors: Active color ramp (its length is the bucket count)

    Returns:
        Mapping of 1-based day of year -> entry copy with derived intensity
    """
    intensities = raw_intensities(entries)
    ranges = intensities_info(intensities, intensity_config, colors)

    entries_by_day: dict[int, Entry] = {}

    for entry in entries:
        entry_date = parse_date(entry.date)
        if entry_date is None:
            logger.debug("Skipping entry with invalid date %r", entry.date)
            continue

        raw = _raw_value(entry)
        if raw is None:
            raw = intensity_config.default_intensity

        intensity = assign_bucket(raw, ranges, intensity_config.show_out_of_range)
        entries_by_day[day_of_year(entry_date)] = replace(entry, intensity=intensity)

    return entries_by_day
