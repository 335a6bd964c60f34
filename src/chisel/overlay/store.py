"""
Operation overlay store: pure transitions over immutable overlay snapshots.

Every mutator takes the current :class:`~chisel.models.overlay.OverlaySnapshot`
and returns a new one. Writes always build a new snapshot, even when the
result equals the input, so each write is its own undo step. Removals of an
absent entry and a reset of the empty overlay return the *same* snapshot
object so callers can detect the no-op with an identity check.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from chisel.models.message import NarrativeMessage
from chisel.models.overlay import (
    DeleteOperation,
    Insertion,
    ModifyOperation,
    Operation,
    OperationType,
    OverlaySnapshot,
)

# ── Exceptions ─────────────────────────────────────────────────────────────────


class ChiselError(Exception):
    """Base class for chisel errors."""


class InvalidOperationError(ChiselError, ValueError):
    """Raised when an operation is not a Delete or Modify operation."""

    def __init__(self, message: str, operation: Any = None) -> None:
        super().__init__(message)
        self.operation = operation


_operation_adapter: TypeAdapter[DeleteOperation | ModifyOperation] = TypeAdapter(Operation)


def parse_operation(value: Any) -> DeleteOperation | ModifyOperation:
    """
    Coerce ``value`` into a Delete or Modify operation.

    Accepts operation models or plain dicts such as
    ``{"type": "modify", "original": {...}, "content": "..."}``.

    Raises:
        InvalidOperationError: For ``"keep"`` (Keep is the absence of an entry
            and is only reachable through :func:`remove_operation`) and for
            anything that does not validate as a Delete/Modify operation.
    """
    if isinstance(value, DeleteOperation | ModifyOperation):
        return value
    op_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if op_type == "keep":
        raise InvalidOperationError(
            "'keep' cannot be stored; use remove_operation() to restore a message",
            operation=value,
        )
    try:
        return _operation_adapter.validate_python(value)
    except ValidationError as exc:
        raise InvalidOperationError(f"Invalid operation: {exc}", operation=value) from exc


# ── Reads ──────────────────────────────────────────────────────────────────────


def get_operation(
    snapshot: OverlaySnapshot, message_id: str
) -> DeleteOperation | ModifyOperation | None:
    """Return the stored operation for ``message_id``, or None when kept."""
    return snapshot.operations.get(message_id)


def get_operation_type(snapshot: OverlaySnapshot, message_id: str) -> OperationType:
    """Return ``"keep"`` when no override exists, otherwise the stored tag."""
    op = snapshot.operations.get(message_id)
    return "keep" if op is None else op.type


# ── Operation transitions ──────────────────────────────────────────────────────


def set_operation(snapshot: OverlaySnapshot, message_id: str, operation: Any) -> OverlaySnapshot:
    """Install or overwrite the override for ``message_id`` (last write wins)."""
    op = parse_operation(operation)
    operations = dict(snapshot.operations)
    operations[message_id] = op
    return OverlaySnapshot(operations, snapshot.insertions)


def remove_operation(snapshot: OverlaySnapshot, message_id: str) -> OverlaySnapshot:
    """Return ``message_id`` to Keep. No-op when there is no override."""
    if message_id not in snapshot.operations:
        return snapshot
    operations = dict(snapshot.operations)
    del operations[message_id]
    return OverlaySnapshot(operations, snapshot.insertions)


# ── Insertion transitions ──────────────────────────────────────────────────────


def add_insertion(
    snapshot: OverlaySnapshot, gap_index: int, message: NarrativeMessage
) -> OverlaySnapshot:
    """Install an insertion at ``gap_index``, replacing any existing one there."""
    insertions = dict(snapshot.insertions)
    insertions[gap_index] = Insertion(gap_index=gap_index, message=message)
    return OverlaySnapshot(snapshot.operations, insertions)


def remove_insertion(snapshot: OverlaySnapshot, gap_index: int) -> OverlaySnapshot:
    """Delete the insertion at ``gap_index``. No-op when the gap is empty."""
    if gap_index not in snapshot.insertions:
        return snapshot
    insertions = dict(snapshot.insertions)
    del insertions[gap_index]
    return OverlaySnapshot(snapshot.operations, insertions)


def replace_insertion(
    snapshot: OverlaySnapshot, gap_index: int, message: NarrativeMessage
) -> OverlaySnapshot:
    """Edit an insertion in place: remove then add at the same gap."""
    return add_insertion(remove_insertion(snapshot, gap_index), gap_index, message)


def reset(snapshot: OverlaySnapshot) -> OverlaySnapshot:
    """Return the empty overlay. No-op when ``snapshot`` is already empty."""
    if snapshot.is_empty:
        return snapshot
    return OverlaySnapshot.empty()
