#!/usr/bin/env python3
"""Inspect and convert marker position backups.

Usage (from the repo root):
    python scripts/map_export.py summary map-positions.json
    python scripts/map_export.py summary preview.png
    python scripts/map_export.py embed map-positions.json map.jpg -o preview.png
    python scripts/map_export.py extract preview.png -o map-positions.json
"""

import argparse
import sys
from pathlib import Path

# Add the repo root to path so the packages import without installing
SCRIPT_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(SCRIPT_DIR.parent))

from PIL import Image  # noqa: E402

from map_console.export_io import (  # noqa: E402
    EXPORT_FILENAME,
    load_export,
    positions_from_export,
    save_export_json,
    save_export_png,
)


def _load_or_exit(path):
    try:
        return load_export(path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_summary(args):
    export = _load_or_exit(args.file)
    positions = positions_from_export(export)
    settings = export.get("mapSettings") or {}
    print(f"Exported: {export.get('timestamp', 'unknown')}")
    print(f"Background: {settings.get('backgroundImage', '-')}")
    print(f"Markers: {len(positions)}")
    for p in positions:
        print(f"  {p.id:>5}  {p.x:6.1f}% {p.y:6.1f}%  {p.name}")


def cmd_embed(args):
    export = _load_or_exit(args.export)
    try:
        img = Image.open(args.image)
        img.load()
    except OSError as e:
        print(f"Error: cannot read image {args.image}: {e}", file=sys.stderr)
        sys.exit(1)
    save_export_png(img.convert("RGB"), export, args.output)
    print(f"Wrote {args.output}")


def cmd_extract(args):
    export = _load_or_exit(args.png)
    save_export_json(export, args.output)
    print(f"Wrote {args.output}")


def main():
    parser = argparse.ArgumentParser(
        description="Inspect and convert marker position backups"
    )
    sub = parser.add_subparsers(dest="command")

    p_summary = sub.add_parser("summary", help="List the markers in a backup")
    p_summary.add_argument("file", help="Backup file (.json or .png)")

    p_embed = sub.add_parser(
        "embed", help="Embed a JSON backup into a PNG preview image"
    )
    p_embed.add_argument("export", help="Backup file (.json or .png)")
    p_embed.add_argument("image", help="Preview image (any Pillow format)")
    p_embed.add_argument("--output", "-o", required=True, help="PNG to write")

    p_extract = sub.add_parser(
        "extract", help="Write the backup embedded in a PNG out as JSON"
    )
    p_extract.add_argument("png", help="PNG with embedded backup")
    p_extract.add_argument(
        "--output", "-o", default=EXPORT_FILENAME, help="JSON to write"
    )

    args = parser.parse_args()

    if args.command == "summary":
        cmd_summary(args)
    elif args.command == "embed":
        cmd_embed(args)
    elif args.command == "extract":
        cmd_extract(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
