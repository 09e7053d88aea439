import colorsys
import re
from collections import namedtuple

Color = namedtuple("Color", ["hex", "rgb", "hsl", "luminance"])

NEUTRAL_COLOR = "#CCCCCC"

# YIQ brightness at which dark text reads better than light text
YIQ_THRESHOLD = 140
DARK_TEXT = "#1a1a1a"
LIGHT_TEXT = "#f2f2f2"

_SHORT_HEX = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$")
_FULL_HEX = re.compile(r"^#([0-9a-f]{6}|[0-9a-f]{8})$")
_BASE_HEX = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _round_channel(value):
    # half-up, matching how editors round 0-255 channels
    return int(value * 255 + 0.5)


def rgb_to_hex(r, g, b):
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_color):
    hex_color = normalize_hex(hex_color).lstrip("#")
    return tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))


def rgb_to_hsl(r, g, b):
    r, g, b = r / 255, g / 255, b / 255
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return (h * 360, s * 100, l * 100)


def hsl_to_rgb(h, s, l):
    h, s, l = h / 360, s / 100, l / 100
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return (_round_channel(r), _round_channel(g), _round_channel(b))


def relative_luminance(r, g, b):
    """Calculate relative luminance per WCAG 2.0"""

    def channel(c):
        c = c / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def contrast_ratio(lum1, lum2):
    """Calculate contrast ratio between two luminances"""
    lighter = max(lum1, lum2)
    darker = min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def create_color(r, g, b):
    """Create a Color namedtuple with all representations"""
    r, g, b = max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b))
    return Color(
        hex=rgb_to_hex(r, g, b),
        rgb=(r, g, b),
        hsl=rgb_to_hsl(r, g, b),
        luminance=relative_luminance(r, g, b),
    )


def color_from_hex(hex_color):
    """Create a Color from any hex string accepted by normalize_hex."""
    return create_color(*hex_to_rgb(hex_color))


def normalize_hex(hex_color):
    """Normalize a hex color to lowercase ``#rrggbb`` or ``#rrggbbaa``.

    Three digit shorthand is expanded and a missing ``#`` is added. Anything
    that still isn't a 6 or 8 digit hex color becomes ``#000000``.
    """
    if not hex_color:
        return "#000000"
    h = hex_color.strip().lower()
    if not h.startswith("#"):
        h = "#" + h
    short = _SHORT_HEX.match(h)
    if short:
        a, b, c = short.groups()
        h = f"#{a}{a}{b}{b}{c}{c}"
    if not _FULL_HEX.match(h):
        return "#000000"
    return h


def parse_base_hex(value):
    """Parse a user supplied base color.

    Args:
        value: ``#RRGGBB``, ``RRGGBB`` or the three digit forms

    Returns:
        Lowercase ``#rrggbb`` string

    Raises:
        ValueError: if the value is not a 3 or 6 digit hex color
    """
    text = (value or "").strip()
    if not _BASE_HEX.match(text):
        raise ValueError(f"Please provide a hex like #007BFF or 007BFF (got {value!r})")
    return normalize_hex(text)


def shade(color, lightness_delta=0, saturation_delta=0):
    """Shift a color's HSL saturation and lightness, clamped to 0-100.

    Deltas are percentage points, so ``shade(c, -10)`` darkens by 10% lightness.
    Accepts a Color or a hex string and returns a Color.
    """
    if isinstance(color, str):
        color = color_from_hex(color)
    h, s, l = color.hsl
    new_s = max(0, min(100, s + saturation_delta))
    new_l = max(0, min(100, l + lightness_delta))
    r, g, b = hsl_to_rgb(h, new_s, new_l)
    return create_color(r, g, b)


def yiq_brightness(color):
    r, g, b = color.rgb
    return (r * 299 + g * 587 + b * 114) / 1000


def contrast_text(color):
    """Pick dark or light text for a background using YIQ brightness"""
    if isinstance(color, str):
        color = color_from_hex(color)
    return DARK_TEXT if yiq_brightness(color) >= YIQ_THRESHOLD else LIGHT_TEXT


def with_alpha(color, alpha_hex):
    """Append a two digit alpha suffix to a color's hex value"""
    if isinstance(color, str):
        return normalize_hex(color)[:7] + alpha_hex.lower()
    return color.hex + alpha_hex.lower()
