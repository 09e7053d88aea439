#!/usr/bin/env python3
"""
Regenerate annotation sidecars for every matching file in a directory.
Files are annotated one at a time through the vscode-color-tools CLI.
"""

import argparse
import subprocess
import sys
from pathlib import Path

SIDECAR_SUFFIXES = (".ann.json", ".ann.html")


def find_sources(root, pattern):
    """Files under root matching pattern, skipping generated sidecars and previews."""
    return sorted(
        p
        for p in root.rglob(pattern)
        if p.is_file() and not p.name.endswith(SIDECAR_SUFFIXES)
    )


def main():
    parser = argparse.ArgumentParser(
        description="Annotate every matching file in a directory"
    )
    parser.add_argument("directory", help="Directory to scan")
    parser.add_argument(
        "--glob",
        default="*.md",
        help="File pattern to annotate (default: *.md)",
    )
    parser.add_argument("--palette", metavar="JSON", help="Palette JSON for all files")
    parser.add_argument("--config", metavar="JSON", help="Symbol configuration for all files")
    parser.add_argument("--seed", type=int, default=0, help="Seed for all files (default: 0)")
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Also write an HTML preview next to each sidecar",
    )
    args = parser.parse_args()

    root = Path(args.directory)
    if not root.is_dir():
        print(f"Not a directory: {root}", file=sys.stderr)
        sys.exit(1)

    sources = find_sources(root, args.glob)
    if not sources:
        print(f"No files matching {args.glob} in {root}")
        return

    print(f"Found {len(sources)} files to annotate\n")

    failed = []
    for source in sources:
        print(f"{'=' * 60}")
        print(f"Annotating: {source}")
        print(f"{'=' * 60}")

        cmd = [sys.executable, "-m", "vscode_color_tools", "annotate", str(source)]
        if args.palette:
            cmd.extend(["--palette", args.palette])
        if args.config:
            cmd.extend(["--config", args.config])
        cmd.extend(["--seed", str(args.seed)])

        result = subprocess.run(cmd)
        if result.returncode != 0:
            print(f"Error annotating {source}")
            failed.append(source)
            continue

        if args.preview:
            subprocess.run(
                [sys.executable, "-m", "vscode_color_tools", "preview", str(source)]
            )
        print()

    print(f"{'=' * 60}")
    print(f"Done! Annotated {len(sources) - len(failed)} of {len(sources)} files")
    for source in failed:
        print(f"  failed: {source}")
    print(f"{'=' * 60}")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
