import os
import sys
from datetime import datetime, timezone

from ..export import export_json, to_json
from .vscode import slugify


class InstallError(Exception):
    """No extension directory could be written."""


class DriftError(Exception):
    """A built theme differs from the file already on disk."""


def default_extension_roots(home=None):
    """Extension roots of the editors that look installed.

    A root is kept when its parent (``~/.vscode`` etc.) exists, even if the
    ``extensions`` folder itself doesn't yet.
    """
    home = home or os.path.expanduser("~")
    candidates = [
        os.path.join(home, ".vscode", "extensions"),
        os.path.join(home, ".vscode-insiders", "extensions"),
        os.path.join(home, ".vscode-oss", "extensions"),
        os.path.join(home, ".cursor", "extensions"),
    ]
    return [p for p in candidates if os.path.exists(os.path.dirname(p))]


def version_stamp(now=None):
    """UTC ``yyyymmddhhmm`` stamp used to force a fresh extension version"""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y%m%d%H%M")


def extension_manifest(name, slug, stamp):
    return {
        "name": f"local-{slug}",
        "displayName": name,
        "publisher": "local",
        "version": f"0.0.{stamp}",
        "engines": {"vscode": "^1.60.0"},
        "categories": ["Themes"],
        "contributes": {
            "themes": [
                {"label": name, "uiTheme": "vs-dark", "path": f"./themes/{slug}.json"},
            ],
        },
    }


def install_theme(theme, base_hex, targets=None, now=None):
    """Install a theme as a local extension in every editor extension root.

    Args:
        theme: Theme dict from generate_vscode_theme
        base_hex: Base color, recorded in the README
        targets: Extension roots to write to (default: default_extension_roots())
        now: Optional datetime for the version stamp

    Returns:
        list: extension folders that were written

    Raises:
        InstallError: if no target could be written
    """
    name = theme["name"]
    slug = slugify(name)
    stamp = version_stamp(now)
    if targets is None:
        targets = default_extension_roots()

    wrote = []
    for base in targets:
        folder = os.path.join(base, f"local.{slug}-{stamp}")
        try:
            export_json(
                extension_manifest(name, slug, stamp),
                os.path.join(folder, "package.json"),
            )
            export_json(theme, os.path.join(folder, "themes", f"{slug}.json"))
            with open(os.path.join(folder, "README.md"), "w", encoding="utf-8") as f:
                f.write(f"# {name}\nBase: {base_hex}\nGenerated locally.\n")
        except OSError as e:
            print(f"Write failed for {base}: {e}", file=sys.stderr)
            continue
        wrote.append(folder)

    if not wrote:
        raise InstallError(
            "No extension targets writable. Create ~/.vscode/extensions and retry."
        )
    return wrote


def build_theme(theme, out_dir, check=False):
    """Write a theme to ``<out_dir>/<slug>.json``.

    In check mode nothing is written: an existing file with different content
    raises DriftError, identical content returns the path unchanged. A missing
    file is written as usual.

    Returns:
        tuple: (path, wrote) where wrote is False when check mode found no drift
    """
    out_path = os.path.join(out_dir, f"{slugify(theme['name'])}.json")
    text = to_json(theme)

    if check and os.path.exists(out_path):
        with open(out_path, encoding="utf-8") as f:
            current = f.read()
        if current != text:
            raise DriftError(f"Drift detected in {out_path}. Run the build to update.")
        return out_path, False

    export_json(theme, out_path)
    return out_path, True
