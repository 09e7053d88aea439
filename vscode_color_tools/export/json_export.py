import json
import os


def to_json(data):
    """Serialize with two-space indent, literal unicode and a trailing newline"""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def export_json(data, filepath):
    """Write a JSON document, creating parent directories as needed.

    Args:
        data: JSON-serializable object
        filepath: Output file path
    """
    parent = os.path.dirname(filepath)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(to_json(data))
