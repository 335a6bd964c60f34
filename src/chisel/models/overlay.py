"""Edit overlay models: per-message operations, gap insertions and snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from chisel.models.message import NarrativeMessage

OperationType = Literal["keep", "delete", "modify"]
"""Effective state of an original message. ``"keep"`` is never stored."""

# ── Operations ─────────────────────────────────────────────────────────────────


class DeleteOperation(BaseModel):
    """Drop the original message from the compressed sequence."""

    model_config = ConfigDict(frozen=True)

    type: Literal["delete"] = "delete"
    original: NarrativeMessage
    """The message being deleted, kept for placeholder rendering and statistics."""


class ModifyOperation(BaseModel):
    """Replace the original message's content with ``content``."""

    model_config = ConfigDict(frozen=True)

    type: Literal["modify"] = "modify"
    original: NarrativeMessage
    content: str
    """Replacement text. Stored as-is, even when equal to the original display text."""


# Discriminated union: the ``type`` field is the discriminator key.
# There is deliberately no keep variant: Keep is the absence of an entry.
Operation = Annotated[DeleteOperation | ModifyOperation, Field(discriminator="type")]


class Insertion(BaseModel):
    """
    A synthetic message placed in a gap between original messages.

    ``gap_index == -1`` is the gap before the first message; ``gap_index == i``
    is the gap immediately after the original message at position ``i``.
    Out-of-range gap indices are accepted and simply never projected.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["insert"] = "insert"
    gap_index: int
    message: NarrativeMessage


# ── Snapshot ───────────────────────────────────────────────────────────────────


class OverlaySnapshot:
    """
    Immutable pair of (operation mapping, insertion mapping).

    Both mappings are exposed as read-only views. Transitions in
    :mod:`chisel.overlay.store` always build a new snapshot; a snapshot that
    has been pushed into history is never modified.
    """

    __slots__ = ("_insertions", "_operations")

    def __init__(
        self,
        operations: Mapping[str, DeleteOperation | ModifyOperation] | None = None,
        insertions: Mapping[int, Insertion] | None = None,
    ) -> None:
        self._operations: Mapping[str, DeleteOperation | ModifyOperation] = MappingProxyType(
            dict(operations or {})
        )
        self._insertions: Mapping[int, Insertion] = MappingProxyType(dict(insertions or {}))

    @classmethod
    def empty(cls) -> OverlaySnapshot:
        """Return the overlay with no operations and no insertions."""
        return cls()

    @property
    def operations(self) -> Mapping[str, DeleteOperation | ModifyOperation]:
        """Read-only view of message id -> operation."""
        return self._operations

    @property
    def insertions(self) -> Mapping[int, Insertion]:
        """Read-only view of gap index -> insertion."""
        return self._insertions

    @property
    def is_empty(self) -> bool:
        return not self._operations and not self._insertions

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, OverlaySnapshot):
            return NotImplemented
        return dict(self._operations) == dict(other._operations) and dict(
            self._insertions
        ) == dict(other._insertions)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"OverlaySnapshot(operations={len(self._operations)}, "
            f"insertions={len(self._insertions)})"
        )
