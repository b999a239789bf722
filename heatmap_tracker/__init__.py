"""heatmap-tracker: a yearly activity heatmap with streaks and insights."""

__version__ = "0.1.0"
