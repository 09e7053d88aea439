from .extension import DriftError, InstallError, build_theme, install_theme
from .roles import derive_roles
from .vscode import (
    generate_readability_report,
    generate_vscode_theme,
    print_palette,
    slugify,
    theme_json,
)

__all__ = [
    "DriftError",
    "InstallError",
    "build_theme",
    "derive_roles",
    "generate_readability_report",
    "generate_vscode_theme",
    "install_theme",
    "print_palette",
    "slugify",
    "theme_json",
]
