"""In-memory session store. Sessions do not survive a restart."""

from typing import Any

from charades.engine import GameController

# session_id -> { controller }
_store: dict[str, dict[str, Any]] = {}


def create(session_id: str, controller: GameController) -> None:
    _store[session_id] = {"controller": controller}


def get(session_id: str) -> dict[str, Any] | None:
    return _store.get(session_id)


def get_controller(session_id: str) -> GameController | None:
    entry = _store.get(session_id)
    if not entry:
        return None
    return entry["controller"]


def delete(session_id: str) -> GameController | None:
    """Remove a session and tear down its controller. Returns it, or None if unknown."""
    entry = _store.pop(session_id, None)
    if not entry:
        return None
    controller = entry["controller"]
    controller.teardown()
    return controller


def list_sessions() -> list[str]:
    return list(_store.keys())


def clear() -> None:
    for session_id in list(_store.keys()):
        delete(session_id)
