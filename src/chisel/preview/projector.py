"""Preview projection: the edited sequence the user will get after compression."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from chisel.models.message import ContentBlock, NarrativeMessage, get_message_display_content
from chisel.models.overlay import DeleteOperation, OverlaySnapshot
from chisel.models.preview import (
    DeletePlaceholder,
    InsertEntry,
    KeepEntry,
    ModifyEntry,
    PreviewEntry,
)

TokenCounter = Callable[[str], int]
ContentExtractor = Callable[[Sequence[ContentBlock]], str]


class PreviewProjector:
    """
    Projects an original message sequence through an overlay snapshot.

    The projection is pure and recomputed on every call; callers that render
    often should memoize on ``(snapshot, messages)`` identity.

    Walk order, for N original messages::

        insert@-1, msg[0], insert@0, msg[1], insert@1, ..., msg[N-1], insert@N-1

    Insertions at gap indices outside ``[-1, N-1]`` are never surfaced.

    Args:
        token_counter: Pure ``str -> int`` token estimate.
        content_extractor: Flattens content blocks into display text.
            Defaults to :func:`~chisel.models.message.get_message_display_content`.
    """

    def __init__(
        self,
        token_counter: TokenCounter,
        content_extractor: ContentExtractor = get_message_display_content,
    ) -> None:
        self._count = token_counter
        self._extract = content_extractor

    def message_tokens(self, message: NarrativeMessage) -> int:
        return self._count(self._extract(message.content))

    def project(
        self,
        messages: Sequence[NarrativeMessage],
        snapshot: OverlaySnapshot,
    ) -> list[PreviewEntry]:
        """
        Build the ordered preview for ``messages`` under ``snapshot``.

        Deleted messages yield a :class:`DeletePlaceholder` carrying the tokens
        saved; modified messages yield a :class:`ModifyEntry` with the token
        delta; kept messages are wrapped unchanged.

        Returns:
            A fresh list of preview entries.
        """
        result: list[PreviewEntry] = []
        self._emit_insertion(result, snapshot, -1)

        for index, message in enumerate(messages):
            op = snapshot.operations.get(message.id)
            if op is None:
                result.append(KeepEntry(id=message.id, index=index, message=message))
            elif isinstance(op, DeleteOperation):
                result.append(
                    DeletePlaceholder(
                        id=message.id,
                        index=index,
                        message=message,
                        tokens_saved=self.message_tokens(message),
                    )
                )
            else:
                original_tokens = self.message_tokens(message)
                result.append(
                    ModifyEntry(
                        id=message.id,
                        index=index,
                        message=message.with_text(op.content),
                        original=message,
                        modified_content=op.content,
                        original_tokens=original_tokens,
                        token_delta=self._count(op.content) - original_tokens,
                    )
                )
            self._emit_insertion(result, snapshot, index)

        return result

    @staticmethod
    def _emit_insertion(
        result: list[PreviewEntry], snapshot: OverlaySnapshot, gap_index: int
    ) -> None:
        insertion = snapshot.insertions.get(gap_index)
        if insertion is not None:
            result.append(
                InsertEntry(
                    id=f"insert-{gap_index}",
                    gap_index=gap_index,
                    message=insertion.message,
                )
            )


def effective_messages(entries: Sequence[PreviewEntry]) -> list[NarrativeMessage]:
    """
    Return the messages that survive compression, in order.

    Delete placeholders are dropped, so the result has
    ``len(messages) - deleted + inserted`` items for in-range edits.
    """
    return [entry.message for entry in entries if not isinstance(entry, DeletePlaceholder)]
