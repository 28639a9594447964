"""Admin-console side of the marker editor: presets, backups and saving."""
