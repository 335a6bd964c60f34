"""Shared fixtures for chisel tests."""

from __future__ import annotations

from typing import Any

import pytest

from chisel.events.bus import EditorEvent, EventBus
from chisel.models.message import NarrativeMessage, TextBlock
from chisel.session import CompressSession
from chisel.tokens.estimator import TokenEstimator


def char_count(text: str) -> int:
    """Token counter where one character is one token. Makes expected totals obvious."""
    return len(text)


def make_message(
    msg_id: str,
    text: str = "Hello world",
    role: str = "user",
) -> NarrativeMessage:
    """Helper to create a test NarrativeMessage with a single text block."""
    return NarrativeMessage(
        id=msg_id,
        role=role,
        timestamp="2026-01-01T00:00:00+00:00",
        content=[TextBlock(content=text)],
    )


@pytest.fixture
def estimator():
    """TokenEstimator using heuristic only (no tiktoken required in tests)."""
    e = TokenEstimator()
    e._force_heuristic = True
    return e


@pytest.fixture
def messages() -> list[NarrativeMessage]:
    """Three messages worth 5, 7 and 3 tokens under ``char_count``."""
    return [
        make_message("msg_a", "aaaaa", role="user"),
        make_message("msg_b", "bbbbbbb", role="assistant"),
        make_message("msg_c", "ccc", role="user"),
    ]


@pytest.fixture
def event_bus():
    """EventBus with a .collected list for asserting events."""
    bus = EventBus()
    collected: list[tuple[EditorEvent, dict[str, Any]]] = []

    def _collect(event: EditorEvent, payload: dict[str, Any]) -> None:
        collected.append((event, payload))

    bus.subscribe_all(_collect)
    bus.collected = collected  # type: ignore[attr-defined]
    return bus


@pytest.fixture
def session(event_bus):
    """Open CompressSession counting one token per character. Closed after each test."""
    s = CompressSession.open(session_id="sess_TEST01", token_counter=char_count, event_bus=event_bus)
    yield s
    s.close()
