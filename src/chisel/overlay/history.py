"""Linear undo/redo history over whole overlay snapshots."""

from __future__ import annotations

from collections import deque

import structlog

from chisel.models.overlay import OverlaySnapshot


class HistoryManager:
    """
    State machine over ``{past, current, future}`` overlay snapshots.

    Snapshots are immutable, so pushing one onto a stack is an O(1) reference
    move rather than a copy, and ``undo()``/``redo()`` are O(1) swaps.

    Rules:
    - ``commit(new)`` pushes ``current`` onto ``past``, makes ``new`` current
      and clears ``future``. Committing the ``current`` object itself is a
      no-op and leaves both stacks untouched; an equal but distinct snapshot
      is a real step.
    - ``undo()`` / ``redo()`` move one step and are no-ops at the stack ends.
    - With ``max_depth`` set, the oldest ``past`` entry is dropped silently
      once the cap is exceeded.

    Example::

        history = HistoryManager()
        history.commit(remove_insertion(history.current, 0))
        if history.can_undo:
            history.undo()
    """

    def __init__(
        self,
        initial: OverlaySnapshot | None = None,
        max_depth: int | None = 50,
    ) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be >= 1 or None")
        self._max_depth = max_depth
        self._past: deque[OverlaySnapshot] = deque(maxlen=max_depth)
        self._future: list[OverlaySnapshot] = []
        self._current = initial or OverlaySnapshot.empty()
        self._logger = structlog.get_logger("chisel.history")

    @property
    def current(self) -> OverlaySnapshot:
        return self._current

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def undo_depth(self) -> int:
        """Number of steps ``undo()`` can take."""
        return len(self._past)

    @property
    def redo_depth(self) -> int:
        """Number of steps ``redo()`` can take."""
        return len(self._future)

    @property
    def max_depth(self) -> int | None:
        return self._max_depth

    def commit(self, snapshot: OverlaySnapshot) -> bool:
        """
        Make ``snapshot`` the current overlay as a new undoable step.

        Args:
            snapshot: The overlay produced by a store transition.

        Returns:
            True if the history changed, False if ``snapshot`` is ``current``.
        """
        if snapshot is self._current:
            return False
        evicted = self._max_depth is not None and len(self._past) == self._max_depth
        self._past.append(self._current)
        self._current = snapshot
        self._future.clear()
        self._logger.debug(
            "history_committed",
            undo_depth=len(self._past),
            evicted_oldest=evicted,
        )
        return True

    def undo(self) -> bool:
        """Step back one snapshot. Returns False when there is nothing to undo."""
        if not self._past:
            return False
        previous = self._past.pop()
        self._future.append(self._current)
        self._current = previous
        self._logger.debug(
            "history_undone", undo_depth=len(self._past), redo_depth=len(self._future)
        )
        return True

    def redo(self) -> bool:
        """Step forward one snapshot. Returns False when there is nothing to redo."""
        if not self._future:
            return False
        following = self._future.pop()
        self._past.append(self._current)
        self._current = following
        self._logger.debug(
            "history_redone", undo_depth=len(self._past), redo_depth=len(self._future)
        )
        return True

    def clear(self) -> None:
        """Drop both stacks and return to the empty overlay. Not undoable."""
        self._past.clear()
        self._future.clear()
        self._current = OverlaySnapshot.empty()
