"""Chisel event bus."""

from chisel.events.bus import EditorEvent, EventBus, Handler
from chisel.events.payloads import OverlayAction, OverlayChangedPayload, SessionPayload

__all__ = [
    "EditorEvent",
    "EventBus",
    "Handler",
    "OverlayAction",
    "OverlayChangedPayload",
    "SessionPayload",
]
