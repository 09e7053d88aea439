"""Shared pytest fixtures for vscode-color-tools tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from vscode_color_tools.annotate import FIXED, RANDOM, SymbolSpec

TRIANGLE = "△"
SQUARE = "▢"
CIRCLE = "○"


@pytest.fixture
def symbols() -> dict[str, SymbolSpec]:
    """One fixed and two random delimiters, like the built-in defaults."""
    return {
        TRIANGLE: SymbolSpec(FIXED, "#FFE26A"),
        SQUARE: SymbolSpec(RANDOM),
        CIRCLE: SymbolSpec(RANDOM),
    }


@pytest.fixture
def palette() -> list[str]:
    return ["#FF6B6B", "#FFD166", "#6ED796", "#64D6E2", "#89B4FA", "#C792EA"]


@pytest.fixture
def write_json(tmp_path: Path):
    """Write an object as JSON under tmp_path and return the path."""

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
