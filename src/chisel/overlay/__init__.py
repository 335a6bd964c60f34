"""Chisel edit overlay: operation store and undo/redo history."""

from chisel.overlay.history import HistoryManager
from chisel.overlay.store import (
    ChiselError,
    InvalidOperationError,
    add_insertion,
    get_operation,
    get_operation_type,
    parse_operation,
    remove_insertion,
    remove_operation,
    replace_insertion,
    reset,
    set_operation,
)

__all__ = [
    "HistoryManager",
    "ChiselError",
    "InvalidOperationError",
    "parse_operation",
    "get_operation",
    "get_operation_type",
    "set_operation",
    "remove_operation",
    "add_insertion",
    "remove_insertion",
    "replace_insertion",
    "reset",
]
