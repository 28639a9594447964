"""Back up marker positions as JSON, or as a PNG with the JSON embedded.

An export document is a snapshot of the editor at one moment:

    {"mapSettings": {...}, "markerPositions": [{id, name, x, y}, ...],
     "timestamp": "2026-01-31T12:00:00+00:00"}

The PNG variant stores that document in a tEXt chunk (key:
``map_marker_export``) of a caller-supplied preview image, so one file is
both something to look at and a complete backup that can be loaded back
into the editor.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from marker_engine.session import EditorSession
from marker_engine.types import MapSettings, MarkerPosition

METADATA_KEY = "map_marker_export"
EXPORT_FILENAME = "map-positions.json"


def build_export(
    session: EditorSession, timestamp: datetime | None = None
) -> dict:
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    return {
        "mapSettings": session.map_settings.to_dict(),
        "markerPositions": [p.to_dict() for p in session.registry],
        "timestamp": timestamp.isoformat(),
    }


def save_export_json(export: dict, path: str) -> None:
    with open(path, "w") as f:
        json.dump(export, f, indent=2)
        f.write("\n")


def save_export_png(img: Image.Image, export: dict, path: str) -> None:
    """Save a preview image with the export JSON embedded as a PNG tEXt chunk."""
    info = PngInfo()
    info.add_text(METADATA_KEY, json.dumps(export))
    img.save(path, format="PNG", pnginfo=info)


def load_export_png(path: str) -> dict:
    """Read an export document from a PNG file's tEXt metadata.

    Raises ValueError if the PNG does not carry one.
    """
    with Image.open(path) as img:
        text_data = getattr(img, "text", None)
        if not text_data or METADATA_KEY not in text_data:
            raise ValueError(
                f"PNG file does not contain marker positions (missing '{METADATA_KEY}' chunk)"
            )
        return json.loads(text_data[METADATA_KEY])


def load_export_json(path: str) -> dict:
    with open(path) as f:
        return json.load(f)


def load_export(path: str) -> dict:
    """Load an export document, dispatching by file extension.

    Supports .png (embedded metadata) and .json. Raises ValueError for any
    other extension, if the document has no ``markerPositions`` list, or if
    an entry of that list is not an object with an ``id``.
    """
    lower = path.lower()
    if lower.endswith(".png"):
        export = load_export_png(path)
    elif lower.endswith(".json"):
        export = load_export_json(path)
    else:
        raise ValueError(f"Unsupported file extension: {path}")
    if not isinstance(export, dict) or not isinstance(
        export.get("markerPositions"), list
    ):
        raise ValueError(f"{path} is not a marker position export")
    _check_entries(export["markerPositions"], path)
    return export


def _check_entries(entries: list, source: str) -> None:
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or "id" not in entry:
            raise ValueError(
                f"{source}: markerPositions[{i}] is not a marker with an id"
            )


def positions_from_export(export: dict) -> list[MarkerPosition]:
    """Marker positions of a document. Raises ValueError on malformed entries."""
    entries = export.get("markerPositions")
    if not isinstance(entries, list):
        raise ValueError("Export has no markerPositions list")
    _check_entries(entries, "export")
    return [MarkerPosition.from_dict(d) for d in entries]


def restore_export(session: EditorSession, export: dict) -> int:
    """Load a backup into the session as one undoable step.

    Marker positions are matched by id; map settings in the document replace
    the session's. Returns the number of markers moved.
    """
    if export.get("mapSettings"):
        session.map_settings = MapSettings.from_dict(export["mapSettings"])
    return session.restore_positions(positions_from_export(export))
