import re

from ..color import contrast_ratio, contrast_text, normalize_hex, shade, with_alpha
from ..export import to_json
from .roles import derive_roles

# Minimum contrast for text roles against the surfaces they sit on
MIN_TEXT_CONTRAST = 4.5
MIN_CHROME_CONTRAST = 3.0

TERMINAL_COLORS = {
    "terminal.ansiBlack": "#1c1f26",
    "terminal.ansiRed": "#ff6b6b",
    "terminal.ansiGreen": "#6ed796",
    "terminal.ansiYellow": "#ffd166",
    "terminal.ansiMagenta": "#c792ea",
    "terminal.ansiCyan": "#64d6e2",
    "terminal.ansiWhite": "#d8dee9",
}


def slugify(name):
    """Lowercase name with non-alphanumeric runs collapsed to '-' (max 40 chars)"""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")[:40]
    return slug or "theme"


def _build_colors(roles):
    accent = roles["accent"]
    bg0, bg1, bg2 = roles["bg0"], roles["bg1"], roles["bg2"]
    fg0 = roles["fg0"].hex
    muted = roles["muted"].hex
    bg2_inactive = shade(bg2, -5)

    colors = {
        # window chrome
        "titleBar.activeBackground": bg2.hex,
        "titleBar.activeForeground": contrast_text(bg2),
        "titleBar.inactiveBackground": bg2_inactive.hex,
        "titleBar.inactiveForeground": contrast_text(bg2_inactive),
        "activityBar.background": bg2.hex,
        "activityBar.foreground": contrast_text(bg2),
        "activityBarBadge.background": accent.hex,
        "activityBarBadge.foreground": contrast_text(accent),
        "statusBar.background": roles["accent_dark"].hex,
        "statusBar.foreground": contrast_text(roles["accent_dark"]),
        # tabs
        "tab.activeBackground": bg0.hex,
        "tab.activeForeground": fg0,
        "tab.inactiveBackground": shade(bg0, -6).hex,
        "tab.inactiveForeground": muted,
        "tab.hoverBackground": shade(bg0, 4).hex,
        "tab.border": shade(bg0, -10).hex,
        # editor
        "editor.background": bg0.hex,
        "editor.foreground": fg0,
        "editorLineNumber.foreground": shade(roles["muted"], -20).hex,
        "editorCursor.foreground": accent.hex,
        "editor.selectionBackground": with_alpha(shade(accent, 10, -30), "80"),
        "editor.inactiveSelectionBackground": with_alpha(shade(accent, 15, -40), "55"),
        "editor.lineHighlightBackground": "#00000040",
        "editor.wordHighlightBackground": "#ffffff10",
        "editor.wordHighlightStrongBackground": "#ffffff15",
        # sidebar/panel
        "sideBar.background": bg1.hex,
        "sideBar.foreground": fg0,
        "sideBarSectionHeader.background": shade(bg1, -6).hex,
        "sideBarSectionHeader.foreground": fg0,
        "panel.background": bg1.hex,
        # misc
        "button.background": accent.hex,
        "button.foreground": contrast_text(accent),
        "checkbox.border": roles["accent_dim"].hex,
        "focusBorder": roles["accent_dim"].hex,
        "list.activeSelectionBackground": with_alpha(shade(accent, -5), "66"),
        "list.activeSelectionForeground": fg0,
        "list.hoverBackground": "#ffffff08",
        "scrollbarSlider.background": "#ffffff20",
        "scrollbarSlider.hoverBackground": "#ffffff30",
        "scrollbarSlider.activeBackground": "#ffffff40",
        # terminal
        "terminal.ansiBlue": accent.hex,
        "terminal.background": bg0.hex,
        "terminal.foreground": fg0,
    }
    colors.update(TERMINAL_COLORS)
    return {key: normalize_hex(colors[key]) for key in sorted(colors)}


def _build_token_colors(roles):
    rules = [
        ("Comment", ["comment", "punctuation.definition.comment"],
         {"foreground": roles["muted"].hex, "fontStyle": "italic"}),
        ("Keyword", ["keyword", "storage.type", "storage.modifier"],
         {"foreground": roles["accent"].hex}),
        ("Function", ["entity.name.function", "support.function", "meta.function-call"],
         {"foreground": roles["accent_light"].hex}),
        ("Variable", ["variable", "meta.definition.variable"],
         {"foreground": "#eaeaea"}),
        ("String", ["string", "constant.other.symbol"],
         {"foreground": "#a6e3a1"}),
        ("Number", ["constant.numeric", "constant.language", "support.constant"],
         {"foreground": "#f9e2af"}),
        ("Type", ["entity.name.type", "support.type", "storage.type.class"],
         {"foreground": "#89b4fa"}),
        ("Punctuation", ["punctuation", "meta.brace", "meta.delimiter"],
         {"foreground": "#c0c5ce"}),
    ]

    token_colors = []
    for name, scope, settings in rules:
        settings = dict(settings)
        if settings.get("foreground"):
            settings["foreground"] = normalize_hex(settings["foreground"])
        token_colors.append({"name": name, "scope": scope, "settings": settings})

    token_colors.sort(
        key=lambda rule: (
            rule["name"],
            len(rule["scope"]),
            rule["settings"].get("foreground", ""),
        )
    )
    return token_colors


def generate_vscode_theme(name, base_hex, roles=None):
    """Generate a VS Code color theme from a single base color.

    Key order is stable (name, type, semanticHighlighting, colors,
    tokenColors), ``colors`` keys are alphabetical and every color is
    normalized, so the same inputs always serialize to the same bytes.

    Args:
        name: Theme display name
        base_hex: Normalized ``#rrggbb`` base color
        roles: Optional pre-derived roles (see derive_roles)

    Returns:
        dict ready for theme_json
    """
    roles = roles or derive_roles(base_hex)
    return {
        "name": name,
        "type": "dark",
        "semanticHighlighting": True,
        "colors": _build_colors(roles),
        "tokenColors": _build_token_colors(roles),
    }


def theme_json(theme):
    return to_json(theme)


def generate_readability_report(roles):
    """Generate a readability report for the derived roles

    Returns:
        tuple: (report text, list of (label, fg hex, bg hex, achieved, required))
    """
    checks = [
        ("editor text", roles["fg0"], roles["bg0"], MIN_TEXT_CONTRAST),
        ("comments", roles["muted"], roles["bg0"], MIN_TEXT_CONTRAST),
        ("keywords", roles["accent"], roles["bg0"], MIN_CHROME_CONTRAST),
        ("functions", roles["accent_light"], roles["bg0"], MIN_CHROME_CONTRAST),
        ("sidebar text", roles["fg0"], roles["bg1"], MIN_TEXT_CONTRAST),
        ("title bar", roles["fg0"], roles["bg2"], MIN_TEXT_CONTRAST),
    ]

    report = []
    report.append("=" * 70)
    report.append("READABILITY REPORT")
    report.append("=" * 70)

    issues = []
    for label, fg, bg, required in checks:
        achieved = contrast_ratio(fg.luminance, bg.luminance)
        status = "✓" if achieved >= required else "✗ FAIL"
        if achieved < required:
            issues.append((label, fg.hex, bg.hex, achieved, required))
        report.append(
            f"  {label:14} {fg.hex} on {bg.hex}  {achieved:4.1f}:1 (min {required}:1)  {status}"
        )

    report.append("=" * 70)
    if issues:
        report.append(f"ISSUES FOUND: {len(issues)}")
        for label, fg_hex, bg_hex, achieved, required in issues:
            report.append(
                f"  - {label}: {fg_hex} on {bg_hex} has {achieved:.1f}:1, needs {required}:1"
            )
    else:
        report.append("ALL COLORS PASS CONTRAST REQUIREMENTS ✓")
    report.append("=" * 70)

    return "\n".join(report), issues


def print_palette(roles):
    """Print derived role colors"""
    bg = roles["bg0"]

    print("\n" + "=" * 60)
    print("THEME ROLES")
    print("=" * 60)
    for key, c in roles.items():
        h, s, l = c.hsl
        contrast = contrast_ratio(c.luminance, bg.luminance)
        print(
            f"  {key:14} {c.hex}  (H: {h:5.1f} S: {s:4.1f}% L: {l:4.1f}%, contrast: {contrast:.1f}:1)"
        )
