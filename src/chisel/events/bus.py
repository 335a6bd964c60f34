"""In-process pub/sub event bus for compression editing sessions."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

import structlog

Handler = Callable[["EditorEvent", dict[str, Any]], None]


class EditorEvent(StrEnum):
    """All event types published by :class:`~chisel.session.CompressSession`.

    Typed payload definitions for each event live in
    :mod:`chisel.events.payloads`.

    **Payload schemas by event:**

    ``SESSION_OPENED``, ``SESSION_CLOSED``
        :class:`~chisel.events.payloads.SessionPayload`: ``session_id: str``

    ``OVERLAY_CHANGED``, ``OVERLAY_RESET``, ``HISTORY_UNDONE``, ``HISTORY_REDONE``
        :class:`~chisel.events.payloads.OverlayChangedPayload`:
        ``session_id``, ``action``, ``can_undo``, ``can_redo``,
        ``has_changes``, plus ``deleted``/``modified``/``inserted`` counts.

    Overlay events are published only after the history has been fully
    updated, so handlers always observe a consistent overlay.
    """

    # Session lifecycle
    SESSION_OPENED = "session.opened"
    SESSION_CLOSED = "session.closed"

    # Overlay edits
    OVERLAY_CHANGED = "overlay.changed"
    OVERLAY_RESET = "overlay.reset"

    # History moves
    HISTORY_UNDONE = "history.undone"
    HISTORY_REDONE = "history.redone"


class EventBus:
    """
    Simple synchronous in-process pub/sub event bus.

    Design decisions:
    - Handlers are called inline within ``publish()`` in registration order.
    - Handler exceptions are logged but never propagate to the publisher.
    - Each ``CompressSession`` owns its own ``EventBus`` unless one is injected.

    Example::

        bus = EventBus()

        def on_change(event, payload):
            print(f"{payload['action']}: undo={payload['can_undo']}")

        bus.subscribe(EditorEvent.OVERLAY_CHANGED, on_change)
    """

    def __init__(self, logger: structlog.BoundLogger | None = None) -> None:
        self._handlers: dict[EditorEvent, list[Handler]] = {}
        self._global_handlers: list[Handler] = []
        self._logger = logger or structlog.get_logger("chisel.events")

    def subscribe(self, event: EditorEvent, handler: Handler) -> None:
        """
        Register a handler for a specific event type.

        Args:
            event: The event type to listen for.
            handler: Callable accepting ``(event, payload)``.
        """
        self._handlers.setdefault(event, []).append(handler)

    def subscribe_all(self, handler: Handler) -> None:
        """Register a handler for ALL event types."""
        self._global_handlers.append(handler)

    def unsubscribe(self, event: EditorEvent, handler: Handler) -> None:
        """Remove a previously registered handler. No-op if not found."""
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: EditorEvent, payload: dict[str, Any]) -> None:
        """
        Publish an event to all registered handlers.

        Exceptions from any handler are logged and swallowed.

        Args:
            event: The event type to publish.
            payload: Event-specific data dictionary.
        """
        all_handlers = list(self._handlers.get(event, [])) + list(self._global_handlers)
        for handler in all_handlers:
            try:
                handler(event, payload)
            except Exception as exc:
                self._logger.error(
                    "event_handler_error",
                    event_type=str(event),
                    handler=getattr(handler, "__qualname__", repr(handler)),
                    error=str(exc),
                )
