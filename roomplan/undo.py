from __future__ import annotations
import logging
from typing import Callable, List, Optional, Tuple

from .models import Layout

logger = logging.getLogger(__name__)


class UndoManager:
    """Linear history of full layout snapshots with a cursor.

    Commits drop everything after the cursor; undo/redo only move the cursor.
    """

    def __init__(self, seed: Layout = (), on_change: Optional[Callable[[], None]] = None):
        self._snapshots: List[Layout] = [tuple(seed)]
        self._cursor = 0
        self.on_change = on_change

    def reset(self, seed: Layout):
        self._snapshots = [tuple(seed)]
        self._cursor = 0
        if self.on_change: self.on_change()

    def commit(self, layout: Layout):
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(tuple(layout))
        self._cursor = len(self._snapshots) - 1
        logger.debug("commit -> %d/%d", self._cursor, len(self._snapshots))
        if self.on_change: self.on_change()

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def undo(self) -> Optional[Layout]:
        if not self.can_undo():
            return None
        self._cursor -= 1
        if self.on_change: self.on_change()
        return self.current()

    def redo(self) -> Optional[Layout]:
        if not self.can_redo():
            return None
        self._cursor += 1
        if self.on_change: self.on_change()
        return self.current()

    def current(self) -> Layout:
        return self._snapshots[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def snapshots(self) -> Tuple[Layout, ...]:
        return tuple(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)
