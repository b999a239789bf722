"""
Data models for heatmap-tracker.

Plain dataclasses shared by the pipeline, the CLI and the web API.
Dictionary input accepts both snake_case and the camelCase keys used by
JSON tracker definitions.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

WEEK_DISPLAY_MODES = ("even", "odd", "none", "all")

VIEW_TABS = (
    "heatmap-tracker",
    "heatmap-tracker-statistics",
    "documentation",
    "legend",
)


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in data."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class Entry:
    """One data point for one calendar date."""

    date: str
    value: float | None = None
    intensity: int | float | None = None
    custom_color: str | None = None
    content: Any = None
    metadata: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        return cls(
            date=data.get("date", ""),
            value=data.get("value"),
            intensity=data.get("intensity"),
            custom_color=_pick(data, "custom_color", "customColor"),
            content=data.get("content"),
            metadata=data.get("metadata"),
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "value": self.value,
            "intensity": self.intensity,
            "custom_color": self.custom_color,
            "content": self.content,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class IntensityConfig:
    """Per-dataset normalization policy."""

    scale_start: float | None = None
    scale_end: float | None = None
    default_intensity: float = 4
    show_out_of_range: bool = True

    @classmethod
    def from_dict(cls, data: dict | None) -> "IntensityConfig":
        data = data or {}
        return cls(
            scale_start=_pick(data, "scale_start", "scaleStart"),
            scale_end=_pick(data, "scale_end", "scaleEnd"),
            default_intensity=_pick(
                data, "default_intensity", "defaultIntensity", default=4
            ),
            show_out_of_range=_pick(
                data, "show_out_of_range", "showOutOfRange", default=True
            ),
        )


@dataclass(frozen=True)
class ColorScheme:
    """Named palette reference and/or an explicit ordered color list."""

    palette_name: str | None = "default"
    custom_colors: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> "ColorScheme":
        data = data or {}
        return cls(
            palette_name=_pick(data, "palette_name", "paletteName", default="default"),
            custom_colors=_pick(data, "custom_colors", "customColors"),
        )


@dataclass(frozen=True)
class Insight:
    """A named metric computed over the selected year's entries."""

    name: str
    calculate: Callable[[list[Entry]], str | int | float]


@dataclass
class TrackerData:
    """Everything needed to draw one heatmap."""

    year: int
    entries: list[Entry] = field(default_factory=list)
    color_scheme: ColorScheme = field(default_factory=ColorScheme)
    intensity_config: IntensityConfig = field(default_factory=IntensityConfig)
    show_current_day_border: bool = True
    separate_months: bool | None = None
    heatmap_title: str | None = None
    heatmap_subtitle: str | None = None
    insights: list[Insight] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict, default_year: int) -> "TrackerData":
        """
        Build tracker data from a plain dictionary.

        Args:
            data: Tracker definition (snake_case or camelCase keys)
            default_year: Year to use when the definition has none

        Returns:
            TrackerData with defaults filled in
        """
        entries = [
            e if isinstance(e, Entry) else Entry.from_dict(e)
            for e in data.get("entries", [])
        ]
        year = data.get("year")
        return cls(
            year=default_year if year is None else year,
            entries=entries,
            color_scheme=ColorScheme.from_dict(_pick(data, "color_scheme", "colorScheme")),
            intensity_config=IntensityConfig.from_dict(
                _pick(data, "intensity_config", "intensityConfig")
            ),
            show_current_day_border=_pick(
                data, "show_current_day_border", "showCurrentDayBorder", default=True
            ),
            separate_months=_pick(data, "separate_months", "separateMonths"),
            heatmap_title=_pick(data, "heatmap_title", "heatmapTitle"),
            heatmap_subtitle=_pick(data, "heatmap_subtitle", "heatmapSubtitle"),
            insights=list(data.get("insights", [])),
        )


@dataclass
class TrackerSettings:
    """User-level settings shared by every heatmap."""

    palettes: dict[str, list[str]] = field(default_factory=dict)
    week_start_day: int = 1
    week_display_mode: str = "even"
    separate_months: bool = True
    language: str = "en"
    view_tabs_visibility: dict[str, bool] = field(
        default_factory=lambda: {view: True for view in VIEW_TABS}
    )


@dataclass(frozen=True)
class Cell:
    """One grid position, either a calendar day or a filler."""

    date: str | None = None
    background_color: str | None = None
    content: Any = None
    metadata: Any = None
    is_today: bool = False
    show_border: bool = False
    has_data: bool = False
    name: str | None = None
    is_space_between_box: bool = False

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "background_color": self.background_color,
            "content": self.content,
            "metadata": self.metadata,
            "is_today": self.is_today,
            "show_border": self.show_border,
            "has_data": self.has_data,
            "name": self.name,
            "is_space_between_box": self.is_space_between_box,
        }


@dataclass(frozen=True)
class IntensityRange:
    """Closed value interval mapped to one bucket of the color ramp."""

    min: float
    max: float
    intensity: int


@dataclass(frozen=True)
class StreakResult:
    """Current and longest runs of consecutive days with entries."""

    current_streak: int = 0
    longest_streak: int = 0
    current_streak_start_date: str | None = None
    current_streak_end_date: str | None = None
    longest_streak_start_date: str | None = None
    longest_streak_end_date: str | None = None
