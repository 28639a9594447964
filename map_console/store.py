"""Hand the edited positions back to the application for persistence.

Storage itself lives outside this project; the console only knows a
``PositionStore`` with a single save call.
"""

from __future__ import annotations

from typing import Protocol

from marker_engine.session import EditorSession
from marker_engine.types import MapSettings


class PositionStore(Protocol):
    def save_positions(
        self, payload: list[dict], map_settings: MapSettings
    ) -> None: ...


def save_session(session: EditorSession, store: PositionStore) -> str:
    """Persist map settings and every marker position in one call.

    Returns the activity message describing what was saved.
    """
    payload = session.save_payload()
    store.save_positions(payload, session.map_settings)
    message = f"Map settings updated with {len(payload)} marker positions"
    print(f"✓ {message}")
    return message
