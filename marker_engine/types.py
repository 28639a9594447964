"""Data types matching the map editor's JSON documents.

Field names are snake_case in Python; ``from_dict`` / ``to_dict`` translate
to and from the camelCase keys used by the admin console and export files.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

UNKNOWN_NAME = "Unknown Project"


@dataclass
class MarkerPosition:
    id: int
    name: str
    x: float = 0.0
    y: float = 0.0

    @staticmethod
    def from_dict(d: dict) -> MarkerPosition:
        return MarkerPosition(
            id=d["id"],
            name=d.get("name") or UNKNOWN_NAME,
            x=d.get("x") or 0.0,
            y=d.get("y") or 0.0,
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class ClipboardPosition:
    x: float
    y: float


@dataclass
class EditorSettings:
    grid_size: float = 10
    snap_to_grid: bool = False
    show_grid: bool = True
    edit_mode: bool = True
    # None = unbounded history
    history_limit: int | None = 100

    @staticmethod
    def from_dict(d: dict | None) -> EditorSettings:
        if not d:
            return EditorSettings()
        return EditorSettings(
            grid_size=d.get("gridSize", 10),
            snap_to_grid=d.get("snapToGrid", False),
            show_grid=d.get("showGrid", True),
            edit_mode=d.get("editMode", True),
            history_limit=d.get("historyLimit", 100),
        )

    def to_dict(self) -> dict:
        return {
            "gridSize": self.grid_size,
            "snapToGrid": self.snap_to_grid,
            "showGrid": self.show_grid,
            "editMode": self.edit_mode,
            "historyLimit": self.history_limit,
        }

    def updated(self, **changes) -> EditorSettings:
        return _updated(self, changes)


@dataclass
class MapSettings:
    background_image: str = ""
    theme: str = "dark"
    default_zoom: int = 12
    center_lat: float = 24.7136
    center_lng: float = 46.6753
    brightness: float = 0.8
    contrast: float = 1.1
    saturation: float = 1.0
    show_labels: bool = True
    enable_animation: bool = True
    cluster_markers: bool = False
    lazy_loading: bool = True
    image_compression: bool = True
    preload_assets: bool = False

    @staticmethod
    def from_dict(d: dict | None) -> MapSettings:
        if not d:
            return MapSettings()
        defaults = MapSettings()
        center = d.get("centerCoordinates") or {}
        return MapSettings(
            background_image=d.get("backgroundImage")
            or defaults.background_image,
            theme=d.get("theme") or defaults.theme,
            default_zoom=d.get("defaultZoom", defaults.default_zoom),
            center_lat=center.get(
                "lat", d.get("centerLat", defaults.center_lat)
            ),
            center_lng=center.get(
                "lng", d.get("centerLng", defaults.center_lng)
            ),
            brightness=d.get("brightness", defaults.brightness),
            contrast=d.get("contrast", defaults.contrast),
            saturation=d.get("saturation", defaults.saturation),
            show_labels=d.get("showLabels", defaults.show_labels),
            enable_animation=d.get(
                "enableAnimation", defaults.enable_animation
            ),
            cluster_markers=d.get("clusterMarkers", defaults.cluster_markers),
            lazy_loading=d.get("lazyLoading", defaults.lazy_loading),
            image_compression=d.get(
                "imageCompression", defaults.image_compression
            ),
            preload_assets=d.get("preloadAssets", defaults.preload_assets),
        )

    def to_dict(self) -> dict:
        return {
            "backgroundImage": self.background_image,
            "theme": self.theme,
            "defaultZoom": self.default_zoom,
            "centerLat": self.center_lat,
            "centerLng": self.center_lng,
            "centerCoordinates": {
                "lat": self.center_lat,
                "lng": self.center_lng,
            },
            "brightness": self.brightness,
            "contrast": self.contrast,
            "saturation": self.saturation,
            "showLabels": self.show_labels,
            "enableAnimation": self.enable_animation,
            "clusterMarkers": self.cluster_markers,
            "lazyLoading": self.lazy_loading,
            "imageCompression": self.image_compression,
            "preloadAssets": self.preload_assets,
        }

    def updated(self, **changes) -> MapSettings:
        return _updated(self, changes)


def _updated(record, changes: dict):
    """Copy a settings record with named fields replaced.

    Raises ValueError naming any field the record does not have.
    """
    known = {f.name for f in fields(record)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ValueError(
            f"Unknown {type(record).__name__} field(s): {', '.join(unknown)}"
        )
    return replace(record, **changes)
