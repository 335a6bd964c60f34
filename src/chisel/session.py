"""CompressSession: the editing context for one session in compression mode."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

import structlog
from ulid import ULID

from chisel.events.bus import EditorEvent, EventBus, Handler
from chisel.events.payloads import OverlayAction
from chisel.models.config import ChiselConfig
from chisel.models.message import NarrativeMessage, TextBlock, get_message_display_content
from chisel.models.overlay import (
    DeleteOperation,
    Insertion,
    ModifyOperation,
    OperationType,
    OverlaySnapshot,
)
from chisel.models.preview import ChangeStats, PreviewEntry, TokenStats
from chisel.overlay import store
from chisel.overlay.history import HistoryManager
from chisel.overlay.store import ChiselError
from chisel.preview.projector import ContentExtractor, PreviewProjector, TokenCounter
from chisel.preview.stats import compute_stats, count_changes
from chisel.tokens.estimator import TokenEstimator


def make_id(prefix: str) -> str:
    """
    Generate a ULID-based sortable identifier.

    Args:
        prefix: Short prefix for readability (e.g. ``"cmp"``, ``"ins"``).

    Returns:
        ID string in the format ``"{prefix}_{ulid}"``.
    """
    return f"{prefix}_{ULID()}"


class SessionClosedError(ChiselError):
    """Raised when mutating a CompressSession after close()."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Compress session is closed: {session_id!r}")
        self.session_id = session_id


class CompressSession:
    """
    Non-destructive edit state for one recorded session in compression mode.

    Tracks keep/delete/modify overrides per original message and synthetic
    insertions per gap, with linear undo/redo. The original messages are never
    stored here: every derived query takes the caller's current sequence.

    Create one when a session enters compression mode and close it when the
    session leaves; nothing is persisted.

    Usage::

        with CompressSession.open() as editor:
            editor.delete_message(messages[1])
            editor.insert_message(-1, "user", "Context: ...")
            preview = editor.get_preview_messages(messages)
            stats = editor.get_token_stats(messages)
            editor.undo()

    Every mutation goes through the history, and ``OVERLAY_CHANGED`` (or the
    matching history/reset event) is published only after the new snapshot
    is in place.
    """

    def __init__(
        self,
        session_id: str,
        config: ChiselConfig,
        token_counter: TokenCounter,
        content_extractor: ContentExtractor,
        event_bus: EventBus,
    ) -> None:
        self._session_id = session_id
        self._config = config
        self._count = token_counter
        self._extract = content_extractor
        self._event_bus = event_bus
        self._history = HistoryManager(max_depth=config.history.max_depth)
        self._projector = PreviewProjector(token_counter, content_extractor)
        self._closed = False
        self._logger = structlog.get_logger("chisel.session").bind(session_id=session_id)

    @classmethod
    def open(
        cls,
        *,
        session_id: str | None = None,
        config: ChiselConfig | None = None,
        token_counter: TokenCounter | None = None,
        content_extractor: ContentExtractor | None = None,
        event_bus: EventBus | None = None,
    ) -> CompressSession:
        """
        Enter compression mode with an empty overlay and empty history.

        Args:
            session_id: Identifier of the session being edited. Generated if None.
            config: Configuration. Defaults to ``ChiselConfig()``.
            token_counter: ``str -> int`` estimate. Defaults to a
                :class:`~chisel.tokens.estimator.TokenEstimator` built from
                ``config.tokens``.
            content_extractor: Content-block flattener. Defaults to
                :func:`~chisel.models.message.get_message_display_content`.
            event_bus: Shared bus. A private one is created if None.

        Returns:
            An open CompressSession.
        """
        cfg = config or ChiselConfig()
        counter = token_counter or TokenEstimator(cfg.tokens)
        session = cls(
            session_id=session_id or make_id("cmp"),
            config=cfg,
            token_counter=counter,
            content_extractor=content_extractor or get_message_display_content,
            event_bus=event_bus or EventBus(),
        )
        session._event_bus.publish(EditorEvent.SESSION_OPENED, {"session_id": session.id})
        session._logger.info("compress_session_opened", max_history=cfg.history.max_depth)
        return session

    def close(self) -> None:
        """
        Leave compression mode, discarding the overlay and its history.

        Idempotent. Publishes ``SESSION_CLOSED`` on the first call.
        """
        if self._closed:
            return
        self._closed = True
        self._history.clear()
        self._event_bus.publish(EditorEvent.SESSION_CLOSED, {"session_id": self._session_id})
        self._logger.info("compress_session_closed")

    def __enter__(self) -> CompressSession:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ── Read accessors ─────────────────────────────────────────────────────────

    @property
    def id(self) -> str:
        """The session ID."""
        return self._session_id

    @property
    def config(self) -> ChiselConfig:
        return self._config

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def snapshot(self) -> OverlaySnapshot:
        """The current immutable overlay snapshot."""
        return self._history.current

    @property
    def operations(self) -> Mapping[str, DeleteOperation | ModifyOperation]:
        """Read-only message id -> operation mapping of the current snapshot."""
        return self._history.current.operations

    @property
    def insertions(self) -> Mapping[int, Insertion]:
        """Read-only gap index -> insertion mapping of the current snapshot."""
        return self._history.current.insertions

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    @property
    def undo_depth(self) -> int:
        return self._history.undo_depth

    @property
    def redo_depth(self) -> int:
        return self._history.redo_depth

    @property
    def has_any_changes(self) -> bool:
        """True iff the current overlay holds at least one operation or insertion."""
        return not self._history.current.is_empty

    @property
    def event_bus(self) -> EventBus:
        """The event bus for this session. Subscribe to re-render on edits."""
        return self._event_bus

    def subscribe(self, event: EditorEvent, handler: Handler) -> None:
        """Convenience wrapper for ``session.event_bus.subscribe()``."""
        self._event_bus.subscribe(event, handler)

    # ── Operation mutators ─────────────────────────────────────────────────────

    def set_operation(
        self,
        message_id: str,
        operation: DeleteOperation | ModifyOperation | dict[str, Any],
    ) -> None:
        """
        Install or overwrite the Delete/Modify override for ``message_id``.

        Raises:
            InvalidOperationError: If ``operation`` is a keep or otherwise invalid.
            SessionClosedError: If the session has been closed.
        """
        self._ensure_open()
        new = store.set_operation(self._history.current, message_id, operation)
        if self._commit(new, "set_operation"):
            self._logger.debug(
                "operation_set", message_id=message_id, operation=new.operations[message_id].type
            )

    def delete_message(self, message: NarrativeMessage) -> None:
        """Mark ``message`` as deleted."""
        self.set_operation(message.id, DeleteOperation(original=message))

    def modify_message(self, message: NarrativeMessage, content: str) -> None:
        """Replace ``message``'s content with ``content`` in the compressed output."""
        self.set_operation(message.id, ModifyOperation(original=message, content=content))

    def remove_operation(self, message_id: str) -> None:
        """Restore ``message_id`` to Keep. Silent no-op if it has no override."""
        self._ensure_open()
        new = store.remove_operation(self._history.current, message_id)
        if self._commit(new, "remove_operation"):
            self._logger.debug("operation_removed", message_id=message_id)

    # ── Insertion mutators ─────────────────────────────────────────────────────

    def add_insertion(self, gap_index: int, message: NarrativeMessage) -> None:
        """Insert ``message`` at ``gap_index``, replacing any insertion already there."""
        self._ensure_open()
        new = store.add_insertion(self._history.current, gap_index, message)
        if self._commit(new, "add_insertion"):
            self._logger.debug("insertion_added", gap_index=gap_index, message_id=message.id)

    def remove_insertion(self, gap_index: int) -> None:
        """Remove the insertion at ``gap_index``. Silent no-op if the gap is empty."""
        self._ensure_open()
        new = store.remove_insertion(self._history.current, gap_index)
        if self._commit(new, "remove_insertion"):
            self._logger.debug("insertion_removed", gap_index=gap_index)

    def replace_insertion(self, gap_index: int, message: NarrativeMessage) -> None:
        """Edit the insertion at ``gap_index`` in place, as a single undo step."""
        self._ensure_open()
        new = store.replace_insertion(self._history.current, gap_index, message)
        if self._commit(new, "replace_insertion"):
            self._logger.debug("insertion_replaced", gap_index=gap_index, message_id=message.id)

    def insert_message(
        self,
        gap_index: int,
        role: Literal["user", "assistant"],
        content: str,
    ) -> NarrativeMessage:
        """
        Build a synthetic message and insert it at ``gap_index``.

        Returns:
            The inserted message (fresh id, single text block, current timestamp).
        """
        message = NarrativeMessage(
            id=make_id("ins"),
            role=role,
            content=[TextBlock(content=content)],
        )
        self.add_insertion(gap_index, message)
        return message

    # ── History ────────────────────────────────────────────────────────────────

    def undo(self) -> None:
        """Step back one edit. Silent no-op when there is nothing to undo."""
        if self._history.undo():
            self._publish(EditorEvent.HISTORY_UNDONE, "undo")

    def redo(self) -> None:
        """Re-apply one undone edit. Silent no-op when there is nothing to redo."""
        if self._history.redo():
            self._publish(EditorEvent.HISTORY_REDONE, "redo")

    def reset_all(self) -> None:
        """Clear every operation and insertion, as one undoable step."""
        self._ensure_open()
        if self._history.commit(store.reset(self._history.current)):
            self._publish(EditorEvent.OVERLAY_RESET, "reset_all")
            self._logger.debug("overlay_reset")

    # ── Derived queries ────────────────────────────────────────────────────────

    def get_operation(self, message_id: str) -> DeleteOperation | ModifyOperation | None:
        return store.get_operation(self._history.current, message_id)

    def get_operation_type(self, message_id: str) -> OperationType:
        """Return ``"keep"``, ``"delete"`` or ``"modify"`` for ``message_id``."""
        return store.get_operation_type(self._history.current, message_id)

    def get_preview_messages(self, messages: Sequence[NarrativeMessage]) -> list[PreviewEntry]:
        """Project ``messages`` through the current overlay. See :class:`PreviewProjector`."""
        return self._projector.project(messages, self._history.current)

    def get_change_stats(self) -> ChangeStats:
        current = self._history.current
        return count_changes(current.operations, current.insertions)

    def get_token_stats(self, messages: Sequence[NarrativeMessage]) -> TokenStats:
        """Compute token totals for ``messages`` under the current overlay."""
        current = self._history.current
        return compute_stats(
            messages, current.operations, current.insertions, self._count, self._extract
        )

    # ── Internals ──────────────────────────────────────────────────────────────

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError(self._session_id)

    def _commit(self, snapshot: OverlaySnapshot, action: OverlayAction) -> bool:
        if not self._history.commit(snapshot):
            return False
        self._publish(EditorEvent.OVERLAY_CHANGED, action)
        return True

    def _publish(self, event: EditorEvent, action: OverlayAction) -> None:
        changes = self.get_change_stats()
        self._event_bus.publish(
            event,
            {
                "session_id": self._session_id,
                "action": action,
                "can_undo": self.can_undo,
                "can_redo": self.can_redo,
                "has_changes": self.has_any_changes,
                "deleted": changes.deleted,
                "modified": changes.modified,
                "inserted": changes.inserted,
            },
        )
