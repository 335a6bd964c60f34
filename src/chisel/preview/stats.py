"""Token statistics before and after compression."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from chisel.models.message import NarrativeMessage, get_message_display_content
from chisel.models.overlay import DeleteOperation, Insertion, ModifyOperation
from chisel.models.preview import ChangeStats, TokenStats
from chisel.preview.projector import ContentExtractor, TokenCounter


def count_changes(
    operations: Mapping[str, DeleteOperation | ModifyOperation],
    insertions: Mapping[int, Insertion],
) -> ChangeStats:
    """Count delete/modify operations and insertions directly from the overlay."""
    deleted = sum(1 for op in operations.values() if op.type == "delete")
    modified = sum(1 for op in operations.values() if op.type == "modify")
    return ChangeStats(deleted=deleted, modified=modified, inserted=len(insertions))


def compute_stats(
    messages: Sequence[NarrativeMessage],
    operations: Mapping[str, DeleteOperation | ModifyOperation],
    insertions: Mapping[int, Insertion],
    token_counter: TokenCounter,
    content_extractor: ContentExtractor = get_message_display_content,
) -> TokenStats:
    """
    Aggregate token totals for an overlay over ``messages``.

    Kept messages count their original display content, modified messages
    count the replacement text, deleted messages count zero. Every insertion
    is counted regardless of whether its gap index is in range.

    Args:
        messages: The original message sequence.
        operations: Message id -> Delete/Modify operation.
        insertions: Gap index -> insertion.
        token_counter: Pure ``str -> int`` token estimate.
        content_extractor: Flattens content blocks into display text.

    Returns:
        TokenStats with totals, savings and change counts.
    """
    original_total = 0
    compressed_total = 0
    for message in messages:
        tokens = token_counter(content_extractor(message.content))
        original_total += tokens
        op = operations.get(message.id)
        if op is None:
            compressed_total += tokens
        elif isinstance(op, ModifyOperation):
            compressed_total += token_counter(op.content)

    for insertion in insertions.values():
        compressed_total += token_counter(content_extractor(insertion.message.content))

    saved_tokens = original_total - compressed_total
    saved_percentage = saved_tokens / original_total * 100 if original_total > 0 else 0.0

    return TokenStats(
        original_total=original_total,
        compressed_total=compressed_total,
        saved_tokens=saved_tokens,
        saved_percentage=saved_percentage,
        change_stats=count_changes(operations, insertions),
    )
