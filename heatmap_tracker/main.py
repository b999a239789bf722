"""
heatmap-tracker: A yearly activity heatmap

Entry point for the console application.
"""

import sys

from heatmap_tracker.cli import display_heatmap, display_legend, display_stats, display_streak
from heatmap_tracker.config import configure_logging, default_settings
from heatmap_tracker.date_utils import HeatmapValueError
from heatmap_tracker.heatmap import build_heatmap, build_legend, build_statistics
from heatmap_tracker.storage import TrackerStorage


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    print("heatmap-tracker - Your year at a glance")
    print("-" * 50)

    # Validate configuration
    try:
        settings = default_settings()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    configure_logging()

    year = None
    if argv:
        try:
            year = int(argv[0])
        except ValueError:
            print(f"\nError: year must be a number, got {argv[0]!r}")
            return 1

    storage = TrackerStorage()
    settings = storage.load_settings(settings)
    tracker = storage.load_tracker(year)

    if not tracker.entries:
        print("No entries found.")
        return 0

    try:
        view = build_heatmap(tracker, settings)
        summary = build_statistics(tracker, settings)
    except HeatmapValueError as e:
        print(f"\nError: {e}")
        return 1

    print()
    display_heatmap(view)
    display_streak(summary)
    display_stats(summary)
    display_legend(build_legend(tracker, settings))

    return 0


if __name__ == "__main__":
    sys.exit(main())
