import argparse
import os
import sys

from .annotate import annotate, build_document, load_config, sidecar_path, write_sidecar
from .color import parse_base_hex
from .palette import base_color_from_image, load_palette, palette_from_image
from .preview import create_html_preview
from .theme import (
    DriftError,
    InstallError,
    build_theme,
    derive_roles,
    generate_readability_report,
    generate_vscode_theme,
    install_theme,
    print_palette,
)

DEFAULT_THEME_NAME = "Electric Lime"
DEFAULT_BASE_HEX = "#32cd32"


def _fail(message, status=1):
    print(message, file=sys.stderr)
    sys.exit(status)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="vscode-color-tools",
        description="Generate VS Code themes from a base color and annotate delimiter regions",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    theme = sub.add_parser("theme", help="Derive a theme and install it as a local extension")
    theme.add_argument("name", help="Theme name")
    theme.add_argument("hex", nargs="?", default=None, help="Base color, e.g. #007BFF")
    theme.add_argument(
        "--from-image",
        metavar="IMAGE",
        help="Use the most vivid color of an image as the base color",
    )
    theme.add_argument(
        "--extensions-dir",
        metavar="DIR",
        action="append",
        default=None,
        help="Extension directory to install into (repeatable; default: detected editors)",
    )
    theme.add_argument(
        "--report",
        action="store_true",
        help="Print the derived roles and a readability report",
    )
    theme.set_defaults(func=_run_theme)

    build = sub.add_parser("build", help="Build a theme to <out-dir>/<slug>.json")
    build.add_argument(
        "--name",
        default=None,
        help=f"Theme name (default: $THEME_NAME or '{DEFAULT_THEME_NAME}')",
    )
    build.add_argument(
        "--base",
        default=None,
        help=f"Base color (default: $BASE_HEX or {DEFAULT_BASE_HEX})",
    )
    build.add_argument("--out-dir", default="themes", help="Output directory (default: themes)")
    build.add_argument(
        "--check",
        action="store_true",
        help="Fail with status 2 if the built theme differs from the file on disk",
    )
    build.set_defaults(func=_run_build)

    ann = sub.add_parser("annotate", help="Write a sidecar of delimiter ranges for a file")
    ann.add_argument("file", help="Text file to scan")
    palette_source = ann.add_mutually_exclusive_group()
    palette_source.add_argument(
        "--palette", "-p",
        metavar="JSON",
        help="Palette JSON: an array of hex colors or {\"colors\": [...]}",
    )
    palette_source.add_argument(
        "--palette-from-image",
        metavar="IMAGE",
        help="Build the palette from an image's dominant colors",
    )
    ann.add_argument("--config", "-c", metavar="JSON", help="Symbol configuration JSON")
    ann.add_argument("--out", "-o", metavar="PATH", help="Output path (default: <file>.ann.json)")
    ann.add_argument("--seed", type=int, default=0, help="Seed for random colors (default: 0)")
    ann.set_defaults(func=_run_annotate)

    preview = sub.add_parser("preview", help="Render a file and its sidecar as HTML")
    preview.add_argument("file", help="Annotated text file")
    preview.add_argument("--sidecar", metavar="JSON", help="Sidecar path (default: <file>.ann.json)")
    preview.add_argument("--out", "-o", metavar="HTML", help="Output path (default: <file>.ann.html)")
    preview.add_argument("--light", action="store_true", help="Render for a light background")
    preview.set_defaults(func=_run_preview)

    return parser


def _base_from_image(image_path):
    print(f"Analyzing: {image_path}")
    base = base_color_from_image(image_path, n_colors=12)
    print(f"Base color: {base.hex}")
    return base.hex


def _run_theme(args, parser):
    """Derive a theme and install it into the editors' extension folders."""
    if args.from_image and args.hex:
        parser.error("Cannot use both hex and --from-image")
    if not args.from_image and not args.hex:
        parser.error("Either hex or --from-image is required")

    if args.from_image:
        try:
            base_hex = _base_from_image(args.from_image)
        except OSError as e:
            _fail(f"Error: {e}")
    else:
        try:
            base_hex = parse_base_hex(args.hex)
        except ValueError as e:
            parser.error(str(e))

    roles = derive_roles(base_hex)
    theme = generate_vscode_theme(args.name, base_hex, roles=roles)

    if args.report:
        print_palette(roles)
        report, _ = generate_readability_report(roles)
        print("\n" + report)

    try:
        wrote = install_theme(theme, base_hex, targets=args.extensions_dir)
    except InstallError as e:
        _fail(str(e))

    print("✓ Theme installed at:")
    for folder in wrote:
        print(f"   {folder}")
    print(
        "\nReload VS Code (Developer: Reload Window), "
        f"then choose **{args.name}** in Color Theme."
    )


def _run_build(args, parser):
    name = args.name or os.environ.get("THEME_NAME") or DEFAULT_THEME_NAME
    try:
        base_hex = parse_base_hex(args.base or os.environ.get("BASE_HEX") or DEFAULT_BASE_HEX)
    except ValueError as e:
        parser.error(str(e))

    theme = generate_vscode_theme(name, base_hex)
    try:
        out_path, wrote = build_theme(theme, args.out_dir, check=args.check)
    except DriftError as e:
        _fail(str(e), status=2)

    if wrote:
        print(f"✓ Wrote {out_path}")
    else:
        print("✓ No drift")


def _run_annotate(args, parser):
    """Scan a file and write its sidecar."""
    if not os.path.isfile(args.file):
        _fail(f"File not found: {args.file}")

    try:
        with open(args.file, encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        _fail(f"{args.file} is not UTF-8 text: {e}")

    try:
        symbols = load_config(args.config)
        if args.palette_from_image:
            palette = palette_from_image(args.palette_from_image)
        else:
            palette = load_palette(args.palette)
    except OSError as e:
        _fail(f"Error: {e}")

    result = annotate(content, symbols, palette, seed=args.seed)
    document = build_document(args.file, result)

    out_path = args.out or sidecar_path(args.file)
    try:
        write_sidecar(document, out_path)
    except OSError as e:
        _fail(f"Error: {e}")

    open_count = sum(1 for r in result.ranges if not r.closed)
    print(f"✓ Wrote annotations -> {out_path}")
    print(f"  {len(result.ranges)} ranges ({open_count} open)")


def _run_preview(args, parser):
    if not os.path.isfile(args.file):
        _fail(f"File not found: {args.file}")

    out_path = args.out or f"{args.file}.ann.html"
    try:
        create_html_preview(args.file, out_path, dark=not args.light, ann_path=args.sidecar)
    except OSError as e:
        _fail(str(e))

    print(f"✓ Wrote preview -> {out_path}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args, parser)


if __name__ == "__main__":
    main()
