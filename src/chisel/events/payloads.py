"""Typed payload definitions for each EditorEvent.

Usage example::

    from chisel.events.bus import EditorEvent
    from chisel.events.payloads import OverlayChangedPayload

    def on_change(event: EditorEvent, payload: OverlayChangedPayload) -> None:
        toolbar.undo_enabled = payload["can_undo"]

    session.subscribe(EditorEvent.OVERLAY_CHANGED, on_change)  # type: ignore[arg-type]
"""

from __future__ import annotations

from typing import Literal, TypedDict

OverlayAction = Literal[
    "set_operation",
    "remove_operation",
    "add_insertion",
    "remove_insertion",
    "replace_insertion",
    "reset_all",
    "undo",
    "redo",
]


class SessionPayload(TypedDict):
    """Payload for :attr:`EditorEvent.SESSION_OPENED` and :attr:`EditorEvent.SESSION_CLOSED`."""

    session_id: str


class OverlayChangedPayload(TypedDict):
    """Payload for every overlay and history event."""

    session_id: str
    action: OverlayAction
    """The session method that produced the new overlay."""
    can_undo: bool
    can_redo: bool
    has_changes: bool
    deleted: int
    modified: int
    inserted: int
