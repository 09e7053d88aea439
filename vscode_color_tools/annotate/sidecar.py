import json
import os
import sys

from ..export import export_json
from .config import symbols_to_dict

SIDECAR_VERSION = 1
SIDECAR_SUFFIX = ".ann.json"


def sidecar_path(file_path):
    return f"{file_path}{SIDECAR_SUFFIX}"


def position_to_dict(pos):
    return {"line": pos.line, "col": pos.column, "index": pos.offset}


def range_to_dict(rng):
    """Sidecar form of a Range; ``open`` only appears on unclosed ranges"""
    data = {
        "symbol": rng.symbol,
        "color": rng.color,
        "start": position_to_dict(rng.start),
        "end": position_to_dict(rng.end),
    }
    if not rng.closed:
        data["open"] = True
    return data


def build_document(file_path, result):
    """Build the sidecar document for an annotated file.

    Args:
        file_path: Path of the annotated text (stored absolute)
        result: AnnotationResult from annotate()

    Returns:
        dict
    """
    return {
        "version": SIDECAR_VERSION,
        "file": os.path.abspath(file_path),
        "legend": {
            "symbols": symbols_to_dict(result.symbols),
            "palette": list(result.palette),
        },
        "ranges": [range_to_dict(r) for r in result.ranges],
    }


def write_sidecar(document, out_path):
    export_json(document, out_path)


def read_sidecar(file_path, ann_path=None):
    """Read the sidecar for a text file (or an explicit sidecar path).

    Returns:
        The sidecar document, or None when it is missing, unreadable or has no
        ``ranges`` list
    """
    ann_path = ann_path or sidecar_path(file_path)
    if not os.path.exists(ann_path):
        return None

    try:
        with open(ann_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"Warning: failed reading {ann_path}: {e}", file=sys.stderr)
        return None

    if not isinstance(data, dict) or not isinstance(data.get("ranges"), list):
        return None
    return data
