import json
import sys

DEFAULT_PALETTE = [
    "#FF6B6B",
    "#FFD166",
    "#6ED796",
    "#64D6E2",
    "#89B4FA",
    "#C792EA",
    "#F9E2AF",
    "#A6E3A1",
    "#F38BA8",
    "#74C7EC",
    "#FAB387",
    "#B4BEFE",
]


def default_palette():
    return list(DEFAULT_PALETTE)


def palette_from_data(data):
    """Pull the color list out of a parsed palette document.

    Args:
        data: A JSON array of hex strings, or an object with a ``colors`` array

    Returns:
        list of color strings, or None if the document has neither shape
    """
    if isinstance(data, dict):
        data = data.get("colors")
    if not isinstance(data, list):
        return None
    return [c for c in data if isinstance(c, str)]


def load_palette(json_path):
    """Load the annotation palette from a JSON file.

    A missing path gives the default palette. A file that can't be opened
    raises OSError; a file that opens but isn't a usable palette falls back to
    the default palette with a warning.

    Args:
        json_path: Path to palette JSON file, or None

    Returns:
        list of color strings
    """
    if json_path is None:
        return default_palette()

    with open(json_path, "rb") as f:
        raw = f.read()

    try:
        palette = palette_from_data(json.loads(raw.decode("utf-8")))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"Warning: could not parse palette {json_path}: {e}", file=sys.stderr)
        return default_palette()

    if palette is None:
        print(
            f"Warning: {json_path} is not a color array or {{\"colors\": [...]}}, "
            "using default palette",
            file=sys.stderr,
        )
        return default_palette()
    return palette
