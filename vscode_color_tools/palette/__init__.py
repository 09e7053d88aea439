from .extract import (
    MIN_ACCENT_SATURATION,
    base_color_from_image,
    extract_colors,
    find_average_color,
    palette_from_image,
    pick_accent,
)
from .loader import DEFAULT_PALETTE, default_palette, load_palette

__all__ = [
    "DEFAULT_PALETTE",
    "MIN_ACCENT_SATURATION",
    "base_color_from_image",
    "default_palette",
    "extract_colors",
    "find_average_color",
    "load_palette",
    "palette_from_image",
    "pick_accent",
]
