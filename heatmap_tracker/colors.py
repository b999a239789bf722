"""
Color ramp resolution.
"""

from heatmap_tracker.models import ColorScheme

DEFAULT_PALETTE_NAME = "default"

DEFAULT_PALETTES: dict[str, list[str]] = {
    "default": ["#c6e48b", "#7bc96f", "#49af5d", "#2e8840", "#196127"],
    "danger": ["#fff33b", "#fdc70c", "#f3903f", "#ed683c", "#e93e3a"],
}


def merge_palettes(palettes: dict[str, list[str]] | None) -> dict[str, list[str]]:
    """Overlay user palettes on the built-in ones."""
    merged = {name: list(colors) for name, colors in DEFAULT_PALETTES.items()}
    for name, colors in (palettes or {}).items():
        merged[name] = list(colors)
    return merged


def resolve_colors(
    color_scheme: ColorScheme | None, palettes: dict[str, list[str]]
) -> list[str]:
    """
    Resolve the ordered color list for a heatmap.

    Precedence: non-empty custom colors, then a known non-empty palette
    (exact, case-sensitive name), then the "default" palette.

    Args:
        color_scheme: The tracker's color scheme (may be None)
        palettes: Palette table, name -> colors

    Returns:
        A new list of colors; never the palette table's own list
    """
    if color_scheme is not None:
        if color_scheme.custom_colors:
            return list(color_scheme.custom_colors)

        name = color_scheme.palette_name
        if name and palettes.get(name):
            return list(palettes[name])

    fallback = palettes.get(DEFAULT_PALETTE_NAME) or DEFAULT_PALETTES[DEFAULT_PALETTE_NAME]
    return list(fallback)
