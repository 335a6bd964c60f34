"""
Chisel: non-destructive compression editing for recorded AI-assistant sessions.

Primary entry point::

    from chisel import CompressSession

    with CompressSession.open() as editor:
        editor.delete_message(messages[3])
        preview = editor.get_preview_messages(messages)
        stats = editor.get_token_stats(messages)
"""

from chisel.events.bus import EditorEvent, EventBus
from chisel.models import (
    ChangeStats,
    ChiselConfig,
    ContentBlock,
    DeleteOperation,
    DeletePlaceholder,
    HistoryConfig,
    InsertEntry,
    Insertion,
    KeepEntry,
    ModifyEntry,
    ModifyOperation,
    NarrativeMessage,
    Operation,
    OperationType,
    OverlaySnapshot,
    PreviewEntry,
    TextBlock,
    TokenConfig,
    TokenStats,
    get_message_display_content,
)
from chisel.overlay.history import HistoryManager
from chisel.overlay.store import ChiselError, InvalidOperationError
from chisel.preview.projector import PreviewProjector, effective_messages
from chisel.preview.stats import compute_stats, count_changes
from chisel.session import CompressSession, SessionClosedError, make_id
from chisel.tokens.estimator import TokenEstimator

__version__ = "0.1.0"

__all__ = [
    # Core
    "CompressSession",
    "make_id",
    # Config
    "ChiselConfig",
    "HistoryConfig",
    "TokenConfig",
    # Models
    "NarrativeMessage",
    "TextBlock",
    "ContentBlock",
    "get_message_display_content",
    "OperationType",
    "DeleteOperation",
    "ModifyOperation",
    "Operation",
    "Insertion",
    "OverlaySnapshot",
    "KeepEntry",
    "ModifyEntry",
    "InsertEntry",
    "DeletePlaceholder",
    "PreviewEntry",
    "ChangeStats",
    "TokenStats",
    # Components
    "HistoryManager",
    "PreviewProjector",
    "effective_messages",
    "compute_stats",
    "count_changes",
    "TokenEstimator",
    # Events
    "EventBus",
    "EditorEvent",
    # Errors
    "ChiselError",
    "InvalidOperationError",
    "SessionClosedError",
]
