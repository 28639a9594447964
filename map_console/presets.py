"""Built-in map backgrounds and named district positions.

Pure data module with no UI dependencies, so it can be imported by scripts
as well as the admin console.

Loads its data from JSON files under ``map_console/builtin/``:

  - PREDEFINED_MAPS: list of background maps (name, url, description and
    the preset whose district positions fit that map).
  - POSITION_PRESETS: dict mapping preset name -> list of named positions
    ({name, x, y} in percent). Maps whose preset has no entry here (e.g.
    "urban") simply offer no district shortcuts.
"""

from __future__ import annotations

import json
from pathlib import Path

from marker_engine.session import EditorSession

_BUILTIN_DIR = Path(__file__).parent / "builtin"


def builtin_data_path(name: str) -> Path:
    """Return the path to ``map_console/builtin/{name}.json``."""
    return _BUILTIN_DIR / f"{name}.json"


def _load_json(path: Path) -> dict:
    with open(path) as f:
        return json.load(f)


PREDEFINED_MAPS: list[dict] = _load_json(
    builtin_data_path("predefined_maps")
)["maps"]
POSITION_PRESETS: dict[str, list[dict]] = _load_json(
    builtin_data_path("position_presets")
)


def find_map(name: str) -> dict | None:
    for m in PREDEFINED_MAPS:
        if m["name"] == name:
            return m
    return None


def get_preset_position(preset: str, index: int) -> tuple[float, float] | None:
    entries = POSITION_PRESETS.get(preset)
    if not entries or index < 0 or index >= len(entries):
        return None
    entry = entries[index]
    return (float(entry["x"]), float(entry["y"]))


def apply_preset(session: EditorSession, preset: str, index: int) -> bool:
    """Move the selected marker onto a named district position."""
    pos = get_preset_position(preset, index)
    if pos is None:
        return False
    return session.apply_position(*pos)


def apply_predefined_map(session: EditorSession, name: str) -> bool:
    """Switch the map background to one of the built-in images."""
    m = find_map(name)
    if m is None:
        return False
    session.update_map_settings(background_image=m["url"])
    return True
