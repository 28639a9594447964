"""Marker position editing core: registry, snapping, undo history, gestures."""
