"""Unit tests for the sidecar document."""

from __future__ import annotations

import json
import os

from vscode_color_tools.annotate import (
    annotate,
    build_document,
    read_sidecar,
    sidecar_path,
    write_sidecar,
)

from tests.conftest import SQUARE, TRIANGLE


class TestBuildDocument:
    """Sidecar document layout."""

    def test_top_level_fields(self, symbols, palette, tmp_path) -> None:
        text_path = tmp_path / "notes.md"
        doc = build_document(str(text_path), annotate("", symbols, palette))
        assert list(doc) == ["version", "file", "legend", "ranges"]
        assert doc["version"] == 1
        assert os.path.isabs(doc["file"])
        assert doc["legend"]["palette"] == palette
        assert doc["legend"]["symbols"][TRIANGLE] == {"kind": "fixed", "color": "#FFE26A"}
        assert doc["legend"]["symbols"][SQUARE] == {"kind": "random"}
        assert doc["ranges"] == []

    def test_range_coordinates(self, symbols, palette) -> None:
        doc = build_document("notes.md", annotate(f"a\n{TRIANGLE}b{TRIANGLE}", symbols, palette))
        assert doc["ranges"] == [
            {
                "symbol": TRIANGLE,
                "color": "#FFE26A",
                "start": {"line": 1, "col": 1, "index": 2},
                "end": {"line": 1, "col": 3, "index": 4},
            }
        ]

    def test_open_flag_only_on_unclosed(self, symbols, palette) -> None:
        text = f"{SQUARE}x{SQUARE}{TRIANGLE}y"
        doc = build_document("notes.md", annotate(text, symbols, palette))
        closed, dangling = doc["ranges"]
        assert "open" not in closed
        assert dangling["open"] is True
        assert dangling["end"] == {"line": 0, "col": 5, "index": 5}


class TestReadWriteSidecar:
    """Persisting and reading sidecars."""

    def test_sidecar_path(self) -> None:
        assert sidecar_path("notes.md") == "notes.md.ann.json"

    def test_write_then_read(self, symbols, palette, tmp_path) -> None:
        text_path = tmp_path / "notes.md"
        doc = build_document(str(text_path), annotate(f"{TRIANGLE}é{TRIANGLE}", symbols, palette))
        write_sidecar(doc, sidecar_path(str(text_path)))

        raw = (tmp_path / "notes.md.ann.json").read_text(encoding="utf-8")
        assert TRIANGLE in raw  # not \u-escaped
        assert raw.endswith("\n")
        assert read_sidecar(str(text_path)) == doc

    def test_identical_inputs_identical_bytes(self, symbols, palette, tmp_path) -> None:
        text = f"{SQUARE}a{SQUARE}" * 4
        paths = []
        for name in ("one.json", "two.json"):
            doc = build_document("notes.md", annotate(text, symbols, palette, seed=3))
            write_sidecar(doc, str(tmp_path / name))
            paths.append(tmp_path / name)
        assert paths[0].read_bytes() == paths[1].read_bytes()

    def test_missing_sidecar(self, tmp_path) -> None:
        assert read_sidecar(str(tmp_path / "notes.md")) is None

    def test_garbled_sidecar(self, tmp_path, capsys) -> None:
        (tmp_path / "notes.md.ann.json").write_text("{", encoding="utf-8")
        assert read_sidecar(str(tmp_path / "notes.md")) is None
        assert "failed reading" in capsys.readouterr().err

    def test_sidecar_without_ranges(self, tmp_path) -> None:
        (tmp_path / "notes.md.ann.json").write_text(json.dumps({"version": 1}), encoding="utf-8")
        assert read_sidecar(str(tmp_path / "notes.md")) is None

    def test_explicit_sidecar_path(self, tmp_path) -> None:
        other = tmp_path / "elsewhere.json"
        other.write_text(json.dumps({"ranges": []}), encoding="utf-8")
        assert read_sidecar(str(tmp_path / "notes.md"), str(other)) == {"ranges": []}


GOLDEN_SIDECAR = """\
{
  "version": 1,
  "file": "/notes/golden.md",
  "legend": {
    "symbols": {
      "△": {
        "kind": "fixed",
        "color": "#FFE26A"
      },
      "▢": {
        "kind": "random"
      },
      "○": {
        "kind": "random"
      }
    },
    "palette": [
      "#111111",
      "#222222",
      "#333333",
      "#444444"
    ]
  },
  "ranges": [
    {
      "symbol": "▢",
      "color": "#222222",
      "start": {
        "line": 0,
        "col": 1,
        "index": 0
      },
      "end": {
        "line": 0,
        "col": 3,
        "index": 2
      }
    },
    {
      "symbol": "▢",
      "color": "#111111",
      "start": {
        "line": 0,
        "col": 4,
        "index": 3
      },
      "end": {
        "line": 0,
        "col": 6,
        "index": 5
      }
    },
    {
      "symbol": "▢",
      "color": "#333333",
      "start": {
        "line": 0,
        "col": 7,
        "index": 6
      },
      "end": {
        "line": 0,
        "col": 9,
        "index": 8
      }
    },
    {
      "symbol": "△",
      "color": "#FFE26A",
      "start": {
        "line": 0,
        "col": 10,
        "index": 9
      },
      "end": {
        "line": 0,
        "col": 10,
        "index": 10
      },
      "open": true
    }
  ]
}
"""


class TestGoldenSidecar:
    """A fixed input, palette and seed always give the same file."""

    def test_seed_zero_document(self, symbols, tmp_path) -> None:
        """Seed 0 draws palette slots 1, 0 (of the unused three) and 0 (of the unused two)."""
        palette = ["#111111", "#222222", "#333333", "#444444"]
        text = f"{SQUARE}a{SQUARE}{SQUARE}b{SQUARE}{SQUARE}c{SQUARE}{TRIANGLE}"
        doc = build_document("/notes/golden.md", annotate(text, symbols, palette, seed=0))
        out = tmp_path / "golden.md.ann.json"
        write_sidecar(doc, str(out))
        assert out.read_text(encoding="utf-8") == GOLDEN_SIDECAR
