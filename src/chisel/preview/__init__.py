"""Derived read-only projections over an edit overlay."""

from chisel.preview.projector import (
    ContentExtractor,
    PreviewProjector,
    TokenCounter,
    effective_messages,
)
from chisel.preview.stats import compute_stats, count_changes

__all__ = [
    "ContentExtractor",
    "PreviewProjector",
    "TokenCounter",
    "compute_stats",
    "count_changes",
    "effective_messages",
]
