from collections import namedtuple

Decoration = namedtuple("Decoration", ["color", "light_background", "dark_background"])

# Alpha suffix for backgrounds on dark themes
DARK_ALPHA = "40"


class DecorationSession:
    """Decoration styles keyed by color, owned by one rendering session.

    Styles are created on first use and dropped by dispose().
    """

    def __init__(self):
        self._decorations = {}

    def __len__(self):
        return len(self._decorations)

    def __contains__(self, color):
        return color in self._decorations

    def ensure(self, color):
        if color not in self._decorations:
            self._decorations[color] = Decoration(
                color=color,
                light_background=color,
                dark_background=color + DARK_ALPHA,
            )
        return self._decorations[color]

    def background(self, color, dark=True):
        decoration = self.ensure(color)
        return decoration.dark_background if dark else decoration.light_background

    def dispose(self):
        self._decorations.clear()


def _coordinate(pos, key):
    value = pos.get(key) or 0
    if not isinstance(value, int):
        return 0
    return max(0, value)


def bucket_ranges(document):
    """Group a sidecar's ranges by color.

    Entries without ``start``/``end`` objects or a string ``color`` are
    skipped and negative coordinates are clamped to 0.

    Returns:
        dict: color -> list of (start, end) tuples of (line, col, index)
    """
    buckets = {}
    for r in document.get("ranges", []):
        if not isinstance(r, dict):
            continue
        start, end, color = r.get("start"), r.get("end"), r.get("color")
        if not isinstance(start, dict) or not isinstance(end, dict):
            continue
        if not isinstance(color, str):
            continue
        span = (
            tuple(_coordinate(start, k) for k in ("line", "col", "index")),
            tuple(_coordinate(end, k) for k in ("line", "col", "index")),
        )
        buckets.setdefault(color, []).append(span)
    return buckets
