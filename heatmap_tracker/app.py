"""
FastAPI web application for heatmap-tracker.

Provides REST API endpoints for the heatmap grid, legend and statistics.
"""

from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from heatmap_tracker.config import default_settings
from heatmap_tracker.date_utils import HeatmapValueError, is_valid_date, utc_today
from heatmap_tracker.heatmap import LegendItem, build_heatmap, build_legend, build_statistics
from heatmap_tracker.insights import BUILTIN_INSIGHTS, get_builtin_insights
from heatmap_tracker.models import Entry, TrackerData, TrackerSettings
from heatmap_tracker.storage import TrackerStorage

app = FastAPI(
    title="heatmap-tracker",
    description="A yearly activity heatmap",
    version="0.1.0",
)


class CamelModel(BaseModel):
    """Accepts camelCase keys as well as snake_case, like TrackerData.from_dict()."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntryIn(CamelModel):
    """Request model for one tracker entry."""

    date: str = Field(..., description="ISO-8601 date, e.g. 2024-03-01")
    value: float | None = Field(None, description="Raw value for the day")
    intensity: float | None = Field(None, description="Raw value (legacy field)")
    custom_color: str | None = Field(None, description="Color overriding the ramp")
    content: Any = None
    metadata: Any = None

    @field_validator("date")
    @classmethod
    def date_must_be_valid(cls, value: str) -> str:
        if not is_valid_date(value):
            raise ValueError(f"Invalid date: {value!r}")
        return value

    def to_entry(self) -> Entry:
        return Entry(**self.model_dump())


class EntriesCreate(CamelModel):
    """Request model for saving entries."""

    entries: list[EntryIn] = Field(..., description="Entries to add or replace")


class SettingsUpdate(CamelModel):
    """Request model for updating user settings."""

    week_start_day: int | None = Field(None, ge=0, le=6, description="0 = Sunday .. 6 = Saturday")
    week_display_mode: Literal["even", "odd", "none", "all"] | None = None
    separate_months: bool | None = None
    language: str | None = Field(None, min_length=2, max_length=10)


class PaletteCreate(BaseModel):
    """Request model for adding or replacing a palette."""

    name: str = Field(..., min_length=1, max_length=100, description="Palette name")
    colors: list[str] = Field(..., min_length=1, description="Colors, lowest intensity first")


class ColorSchemeIn(CamelModel):
    palette_name: str | None = "default"
    custom_colors: list[str] | None = None


class IntensityConfigIn(CamelModel):
    scale_start: float | None = None
    scale_end: float | None = None
    default_intensity: float = 4
    show_out_of_range: bool = True


class TrackerOptions(CamelModel):
    """Request model for per-tracker display options."""

    color_scheme: ColorSchemeIn = Field(default_factory=ColorSchemeIn)
    intensity_config: IntensityConfigIn = Field(default_factory=IntensityConfigIn)
    show_current_day_border: bool = True
    separate_months: bool | None = None
    heatmap_title: str | None = Field(None, max_length=200)
    heatmap_subtitle: str | None = Field(None, max_length=500)
    insights: list[str] = Field(default_factory=list, description="Built-in insight keys")

    @field_validator("insights")
    @classmethod
    def insights_must_be_known(cls, value: list[str]) -> list[str]:
        unknown = [key for key in value if key not in BUILTIN_INSIGHTS]
        if unknown:
            raise ValueError(f"Unknown insights: {', '.join(unknown)}")
        return value


class RenderRequest(TrackerOptions):
    """Request model for rendering a tracker without storing it."""

    year: int | None = None
    entries: list[EntryIn] = Field(default_factory=list)
    week_start_day: int | None = Field(None, ge=0, le=6)
    week_display_mode: Literal["even", "odd", "none", "all"] | None = None
    palettes: dict[str, list[str]] = Field(default_factory=dict)


def _load_settings(storage: TrackerStorage) -> TrackerSettings:
    """
    Load settings from the environment and storage.

    Raises:
        HTTPException: on configuration errors
    """
    try:
        defaults = default_settings()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
    return storage.load_settings(defaults)


def _run(build, tracker: TrackerData, settings: TrackerSettings, **kwargs):
    """Run a pipeline step, mapping calendar errors to 422."""
    try:
        return build(tracker, settings, **kwargs)
    except HeatmapValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _legend_to_list(legend: list[LegendItem]) -> list[dict]:
    return [
        {"color": item.color, "intensity": item.intensity, "min": item.min, "max": item.max}
        for item in legend
    ]


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/heatmap")
def get_heatmap(year: int | None = None):
    """
    Get the grid cells for a year.

    Returns:
        JSON with colors, header labels and the ordered cell list
    """
    storage = TrackerStorage()
    settings = _load_settings(storage)
    tracker = storage.load_tracker(year)

    view = _run(build_heatmap, tracker, settings, today=utc_today())
    return view.to_dict()


@app.get("/api/statistics")
def get_statistics(year: int | None = None):
    """
    Get streaks, tracking totals and insights.

    Returns:
        JSON statistics summary
    """
    storage = TrackerStorage()
    settings = _load_settings(storage)
    tracker = storage.load_tracker(year)

    summary = _run(build_statistics, tracker, settings, today=utc_today())
    return summary.to_dict()


@app.get("/api/legend")
def get_legend(year: int | None = None):
    """
    Get the color legend with the value range of each color.

    Returns:
        JSON with a list of legend items
    """
    storage = TrackerStorage()
    settings = _load_settings(storage)
    tracker = storage.load_tracker(year)

    legend = _run(build_legend, tracker, settings)
    return {"legend": _legend_to_list(legend)}


@app.get("/api/entries")
def get_entries(year: int | None = None):
    """Get stored entries, optionally for one year."""
    storage = TrackerStorage()
    return {"entries": [entry.to_dict() for entry in storage.get_entries(year)]}


@app.post("/api/entries")
def save_entries(payload: EntriesCreate):
    """
    Add entries, replacing stored entries for the same dates.

    Returns:
        JSON with the number of entries saved
    """
    storage = TrackerStorage()
    saved = storage.save_entries([entry.to_entry() for entry in payload.entries])
    return {"saved": saved}


@app.delete("/api/entries/{entry_date}")
def delete_entry(entry_date: str):
    """Delete the entry for a date."""
    storage = TrackerStorage()
    if not storage.delete_entry(entry_date):
        raise HTTPException(status_code=404, detail="Entry not found")
    return {"deleted": entry_date}


@app.get("/api/settings")
def get_settings():
    """Get the effective user settings."""
    storage = TrackerStorage()
    settings = _load_settings(storage)
    return {
        "palettes": settings.palettes,
        "week_start_day": settings.week_start_day,
        "week_display_mode": settings.week_display_mode,
        "separate_months": settings.separate_months,
        "language": settings.language,
        "view_tabs_visibility": settings.view_tabs_visibility,
    }


@app.post("/api/settings")
def update_settings(update: SettingsUpdate):
    """
    Update user settings.

    Args:
        update: SettingsUpdate with the fields to change

    Returns:
        JSON with the effective settings
    """
    storage = TrackerStorage()
    storage.save_settings(**update.model_dump(exclude_none=True))
    return get_settings()


@app.post("/api/palettes")
def save_palette(palette: PaletteCreate):
    """Add or replace a named palette."""
    storage = TrackerStorage()
    storage.save_palette(palette.name, palette.colors)
    return {"name": palette.name, "colors": palette.colors}


@app.get("/api/tracker")
def get_tracker_options():
    """Get the stored tracker options."""
    storage = TrackerStorage()
    return TrackerOptions(**storage.get_tracker_options()).model_dump()


@app.post("/api/tracker")
def set_tracker_options(options: TrackerOptions):
    """Replace the stored tracker options."""
    storage = TrackerStorage()
    storage.set_tracker_options(options.model_dump())
    return options.model_dump()


@app.post("/api/render")
def render(request: RenderRequest):
    """
    Render a tracker sent in the request body. Nothing is stored.

    Returns:
        JSON with the heatmap grid, legend and statistics
    """
    storage = TrackerStorage()
    settings = _load_settings(storage)

    if request.week_start_day is not None:
        settings.week_start_day = request.week_start_day
    if request.week_display_mode is not None:
        settings.week_display_mode = request.week_display_mode
    settings.palettes.update(request.palettes)

    data = request.model_dump(exclude={"entries", "palettes", "insights"})
    tracker = TrackerData.from_dict(
        {**data, "entries": [entry.to_entry() for entry in request.entries]},
        default_year=utc_today().year,
    )
    tracker.insights = get_builtin_insights(request.insights)

    today = utc_today()
    view = _run(build_heatmap, tracker, settings, today=today)
    summary = _run(build_statistics, tracker, settings, today=today)
    legend = _run(build_legend, tracker, settings)

    return {
        "heatmap": view.to_dict(),
        "statistics": summary.to_dict(),
        "legend": _legend_to_list(legend),
    }
