"""Message and content block data models for recorded conversation sessions."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

# ── Content Blocks ─────────────────────────────────────────────────────────────


class TextBlock(BaseModel):
    """A plain text segment of a message."""

    type: Literal["text"] = "text"
    content: str
    is_degraded: bool | None = None
    """True when the block was degraded from an unrecognised source format."""


class ThinkingBlock(BaseModel):
    """Extended thinking / reasoning content."""

    type: Literal["thinking"] = "thinking"
    content: str
    subject: str | None = None
    timestamp: str | None = None


class ToolUseBlock(BaseModel):
    """A tool call requested by the assistant."""

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: dict[str, Any] = Field(default_factory=dict)
    correlation_id: str | None = None
    display_name: str | None = None
    description: str | None = None


class ToolResultBlock(BaseModel):
    """The result of a tool call, paired with its ``ToolUseBlock`` by id."""

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: str
    is_error: bool = False
    correlation_id: str | None = None
    display_content: str | None = None


class CodeDiffBlock(BaseModel):
    """A unified diff applied to a file."""

    type: Literal["code_diff"] = "code_diff"
    file_path: str
    diff: str
    language: str | None = None


class ImageBlock(BaseModel):
    """Inline image content. The payload never contributes to display text."""

    type: Literal["image"] = "image"
    media_type: str
    data: str
    source_type: str | None = None
    alt_text: str | None = None


class ReferenceBlock(BaseModel):
    """A reference to a file snippet or symbol."""

    type: Literal["reference"] = "reference"
    file_path: str
    start_line: int | None = None
    end_line: int | None = None
    content: str | None = None
    symbol: str | None = None


class CodeSuggestionBlock(BaseModel):
    """A code suggestion targeting a file."""

    type: Literal["code_suggestion"] = "code_suggestion"
    file_path: str
    code: str
    language: str | None = None


# Discriminated union: the ``type`` field is the discriminator key.
ContentBlock = Annotated[
    TextBlock
    | ThinkingBlock
    | ToolUseBlock
    | ToolResultBlock
    | CodeDiffBlock
    | ImageBlock
    | ReferenceBlock
    | CodeSuggestionBlock,
    Field(discriminator="type"),
]


# ── Message ────────────────────────────────────────────────────────────────────


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class NarrativeMessage(BaseModel):
    """
    A single message of a recorded session.

    Original messages are owned by the caller and treated as immutable: the
    editing engine only ever wraps them or derives modified copies via
    ``model_copy``.
    """

    id: str
    role: Literal["user", "assistant"]
    timestamp: str = Field(default_factory=_now_iso)
    """ISO-8601 timestamp."""
    content: list[ContentBlock] = Field(default_factory=list)

    def display_content(self) -> str:
        """Flatten all content blocks into a single display string."""
        return get_message_display_content(self.content)

    def with_text(self, text: str) -> NarrativeMessage:
        """Return a copy whose content is a single text block holding ``text``."""
        return self.model_copy(update={"content": [TextBlock(content=text)]})


# ── Display content ────────────────────────────────────────────────────────────


def _block_display(block: Any) -> str:
    if isinstance(block, TextBlock):
        return block.content
    if isinstance(block, ThinkingBlock):
        return block.content
    if isinstance(block, ToolUseBlock):
        name = block.display_name or block.name
        return f"{name}\n{json.dumps(block.input, ensure_ascii=False, sort_keys=True)}"
    if isinstance(block, ToolResultBlock):
        return block.display_content or block.content
    if isinstance(block, CodeDiffBlock):
        return f"{block.file_path}\n{block.diff}"
    if isinstance(block, ImageBlock):
        return f"[Image: {block.alt_text or block.media_type}]"
    if isinstance(block, ReferenceBlock):
        return block.content or block.symbol or block.file_path
    if isinstance(block, CodeSuggestionBlock):
        return f"{block.file_path}\n{block.code}"
    return ""


def get_message_display_content(blocks: Sequence[ContentBlock]) -> str:
    """
    Flatten a message's content blocks into a single display string.

    Every block kind contributes (not only text blocks), so that token
    accounting sees tool calls, tool results, thinking and code as well.
    Image payloads are replaced by a short placeholder.

    Args:
        blocks: The message's ordered content blocks.

    Returns:
        The non-empty block renderings joined by blank lines.
    """
    parts = (_block_display(block) for block in blocks)
    return "\n\n".join(part for part in parts if part)
