"""Unit tests for VS Code theme generation, building and installing."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone

import pytest

from vscode_color_tools.theme import (
    DriftError,
    InstallError,
    build_theme,
    derive_roles,
    generate_readability_report,
    generate_vscode_theme,
    install_theme,
    slugify,
    theme_json,
)
from vscode_color_tools.theme.extension import default_extension_roots

HEX_COLOR = re.compile(r"^#[0-9a-f]{6}([0-9a-f]{2})?$")


@pytest.fixture
def theme():
    return generate_vscode_theme("Electric Lime", "#32cd32")


class TestSlugify:
    """Theme slugs."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("My Theme", "my-theme"),
            ("  Sepia -- Night!! ", "sepia-night"),
            ("Café Noir", "caf-noir"),
            ("", "theme"),
            ("***", "theme"),
        ],
    )
    def test_slugify(self, name, expected) -> None:
        assert slugify(name) == expected

    def test_truncated_to_forty(self) -> None:
        assert len(slugify("a" * 60)) == 40


class TestDeriveRoles:
    """Roles derived from the base color."""

    def test_accent_is_base(self) -> None:
        assert derive_roles("#ff0000")["accent"].hex == "#ff0000"

    def test_accent_dark_is_darker(self) -> None:
        roles = derive_roles("#ff0000")
        assert roles["accent_dark"].hsl[2] < roles["accent_dim"].hsl[2] < roles["accent"].hsl[2]

    def test_fixed_roles(self) -> None:
        roles = derive_roles("#ff0000")
        assert roles["bg0"].hex == "#0f1115"
        assert roles["fg0"].hex == "#e6e6e6"
        assert roles["muted"].hex == "#9aa3ad"


class TestGenerateVscodeTheme:
    """Theme document shape and ordering."""

    def test_top_level_key_order(self, theme) -> None:
        assert list(theme) == ["name", "type", "semanticHighlighting", "colors", "tokenColors"]
        assert theme["type"] == "dark"
        assert theme["semanticHighlighting"] is True

    def test_colors_sorted_and_normalized(self, theme) -> None:
        keys = list(theme["colors"])
        assert keys == sorted(keys)
        for value in theme["colors"].values():
            assert HEX_COLOR.match(value), value

    def test_accent_roles_follow_base(self, theme) -> None:
        colors = theme["colors"]
        assert colors["editorCursor.foreground"] == "#32cd32"
        assert colors["button.background"] == "#32cd32"
        assert colors["terminal.ansiBlue"] == "#32cd32"
        assert colors["editor.background"] == "#0f1115"

    def test_contrast_text_on_accent(self, theme) -> None:
        assert theme["colors"]["button.foreground"] == "#1a1a1a"

    def test_alpha_colors(self, theme) -> None:
        colors = theme["colors"]
        assert colors["editor.selectionBackground"].endswith("80")
        assert colors["editor.inactiveSelectionBackground"].endswith("55")
        assert colors["list.activeSelectionBackground"].endswith("66")
        assert colors["editor.lineHighlightBackground"] == "#00000040"

    def test_token_colors_sorted_by_name(self, theme) -> None:
        names = [rule["name"] for rule in theme["tokenColors"]]
        assert names == sorted(names)
        assert len(names) == 8

    def test_comment_rule(self, theme) -> None:
        comment = next(r for r in theme["tokenColors"] if r["name"] == "Comment")
        assert comment["settings"] == {"foreground": "#9aa3ad", "fontStyle": "italic"}

    def test_json_is_deterministic(self) -> None:
        a = theme_json(generate_vscode_theme("X", "#9f7a56"))
        b = theme_json(generate_vscode_theme("X", "#9f7a56"))
        assert a == b
        assert a.endswith("}\n")

    def test_different_base_different_theme(self) -> None:
        assert generate_vscode_theme("X", "#9f7a56") != generate_vscode_theme("X", "#007bff")


class TestReadabilityReport:
    """Contrast report for the roles."""

    def test_report_lists_checks(self) -> None:
        report, issues = generate_readability_report(derive_roles("#32cd32"))
        assert "READABILITY REPORT" in report
        assert "editor text" in report
        assert all(len(issue) == 5 for issue in issues)

    def test_editor_text_passes(self) -> None:
        _, issues = generate_readability_report(derive_roles("#32cd32"))
        assert "editor text" not in [issue[0] for issue in issues]


class TestBuildTheme:
    """Building to a themes directory with drift detection."""

    def test_writes_slug_file(self, theme, tmp_path) -> None:
        out_path, wrote = build_theme(theme, str(tmp_path / "themes"))
        assert wrote
        assert out_path.endswith("electric-lime.json")
        with open(out_path, encoding="utf-8") as f:
            assert json.load(f) == theme

    def test_check_without_drift(self, theme, tmp_path) -> None:
        build_theme(theme, str(tmp_path))
        out_path, wrote = build_theme(theme, str(tmp_path), check=True)
        assert not wrote

    def test_check_detects_drift(self, theme, tmp_path) -> None:
        out_path, _ = build_theme(theme, str(tmp_path))
        with open(out_path, "a", encoding="utf-8") as f:
            f.write(" ")
        with pytest.raises(DriftError):
            build_theme(theme, str(tmp_path), check=True)

    def test_check_writes_missing_file(self, theme, tmp_path) -> None:
        _, wrote = build_theme(theme, str(tmp_path), check=True)
        assert wrote


class TestInstallTheme:
    """Installing as a local extension."""

    NOW = datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc)

    def test_writes_extension_folder(self, theme, tmp_path) -> None:
        root = tmp_path / "extensions"
        (folder,) = install_theme(theme, "#32cd32", targets=[str(root)], now=self.NOW)

        assert folder.endswith("local.electric-lime-202601020304")
        with open(f"{folder}/package.json", encoding="utf-8") as f:
            manifest = json.load(f)
        assert manifest["version"] == "0.0.202601020304"
        assert manifest["contributes"]["themes"][0] == {
            "label": "Electric Lime",
            "uiTheme": "vs-dark",
            "path": "./themes/electric-lime.json",
        }
        with open(f"{folder}/themes/electric-lime.json", encoding="utf-8") as f:
            assert json.load(f) == theme
        with open(f"{folder}/README.md", encoding="utf-8") as f:
            assert "Base: #32cd32" in f.read()

    def test_skips_unwritable_target(self, theme, tmp_path, capsys) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        good = tmp_path / "good"
        wrote = install_theme(
            theme, "#32cd32", targets=[str(blocker / "extensions"), str(good)], now=self.NOW
        )
        assert len(wrote) == 1
        assert wrote[0].startswith(str(good))
        assert "Write failed" in capsys.readouterr().err

    def test_no_targets_raises(self, theme) -> None:
        with pytest.raises(InstallError):
            install_theme(theme, "#32cd32", targets=[])

    def test_default_roots_need_editor_folder(self, tmp_path) -> None:
        (tmp_path / ".vscode").mkdir()
        (tmp_path / ".cursor").mkdir()
        roots = default_extension_roots(home=str(tmp_path))
        assert roots == [
            str(tmp_path / ".vscode" / "extensions"),
            str(tmp_path / ".cursor" / "extensions"),
        ]
