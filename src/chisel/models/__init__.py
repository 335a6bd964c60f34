"""Chisel data models."""

from chisel.models.config import ChiselConfig, HistoryConfig, TokenConfig
from chisel.models.message import (
    CodeDiffBlock,
    CodeSuggestionBlock,
    ContentBlock,
    ImageBlock,
    NarrativeMessage,
    ReferenceBlock,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolUseBlock,
    get_message_display_content,
)
from chisel.models.overlay import (
    DeleteOperation,
    Insertion,
    ModifyOperation,
    Operation,
    OperationType,
    OverlaySnapshot,
)
from chisel.models.preview import (
    ChangeStats,
    DeletePlaceholder,
    InsertEntry,
    KeepEntry,
    ModifyEntry,
    PreviewEntry,
    TokenStats,
)

__all__ = [
    # Config
    "ChiselConfig",
    "HistoryConfig",
    "TokenConfig",
    # Content blocks
    "TextBlock",
    "ThinkingBlock",
    "ToolUseBlock",
    "ToolResultBlock",
    "CodeDiffBlock",
    "ImageBlock",
    "ReferenceBlock",
    "CodeSuggestionBlock",
    "ContentBlock",
    # Message
    "NarrativeMessage",
    "get_message_display_content",
    # Overlay
    "OperationType",
    "DeleteOperation",
    "ModifyOperation",
    "Operation",
    "Insertion",
    "OverlaySnapshot",
    # Preview and statistics
    "KeepEntry",
    "ModifyEntry",
    "InsertEntry",
    "DeletePlaceholder",
    "PreviewEntry",
    "ChangeStats",
    "TokenStats",
]
