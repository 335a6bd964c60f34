"""Derived preview entries and token statistics models."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from chisel.models.message import NarrativeMessage

# ── Preview Entries ────────────────────────────────────────────────────────────


class KeepEntry(BaseModel):
    """An original message that passes through unchanged."""

    operation: Literal["keep"] = "keep"
    id: str
    index: int
    """Position of the original message in the input sequence."""
    message: NarrativeMessage


class ModifyEntry(BaseModel):
    """An original message rendered with replacement content."""

    operation: Literal["modify"] = "modify"
    id: str
    index: int
    message: NarrativeMessage
    """Copy of the original message whose content is the modified text."""
    original: NarrativeMessage
    modified_content: str
    original_tokens: int
    token_delta: int
    """``estimate(modified) - estimate(original)``. Negative when the edit shrinks the message."""


class InsertEntry(BaseModel):
    """A synthetic message injected at a gap."""

    operation: Literal["insert"] = "insert"
    id: str
    """``"insert-{gap_index}"``; stable for a given gap."""
    gap_index: int
    message: NarrativeMessage


class DeletePlaceholder(BaseModel):
    """Placeholder shown where a deleted original message used to be."""

    operation: Literal["delete"] = "delete"
    id: str
    index: int
    message: NarrativeMessage
    """The deleted original message."""
    tokens_saved: int


PreviewEntry = Annotated[
    KeepEntry | ModifyEntry | InsertEntry | DeletePlaceholder,
    Field(discriminator="operation"),
]


# ── Statistics ─────────────────────────────────────────────────────────────────


class ChangeStats(BaseModel):
    """Per-kind change counts, read directly from the overlay."""

    deleted: int = Field(default=0, ge=0)
    modified: int = Field(default=0, ge=0)
    inserted: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.deleted + self.modified + self.inserted


class TokenStats(BaseModel):
    """
    Token totals before and after compression.

    Attributes:
        original_total: Sum over all original messages, ignoring the overlay.
        compressed_total: Sum over kept and modified messages plus insertions.
        saved_tokens: ``original_total - compressed_total``. May be negative
            when insertions or edits make the session longer.
        saved_percentage: ``saved_tokens / original_total * 100``, or ``0.0``
            when ``original_total`` is zero.
        change_stats: Counts of delete/modify/insert edits.
    """

    original_total: int
    compressed_total: int
    saved_tokens: int
    saved_percentage: float
    change_stats: ChangeStats
