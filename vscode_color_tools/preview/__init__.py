from .decorations import DecorationSession, bucket_ranges
from .render import create_html_preview, paint_characters, render_html

__all__ = [
    "DecorationSession",
    "bucket_ranges",
    "create_html_preview",
    "paint_characters",
    "render_html",
]
