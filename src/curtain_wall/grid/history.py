# File: src/curtain_wall/grid/history.py
"""
Undo/redo history for a design session.

Snapshots are full grid states taken *before* a mutation, so undoing an
entry restores exactly what the user saw before that action. The history
is bounded; the oldest snapshots are dropped first.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from .panel_grid import PanelGrid

logger = logging.getLogger(__name__)

ACTION_MERGE = "panel_merge"
ACTION_SPLIT = "panel_split"
ACTION_TYPE_CHANGE = "panel_type_change"
ACTION_COLUMN_SIZE = "column_size_change"
ACTION_ROW_SIZE = "row_size_change"
ACTION_RESET_SIZES = "reset_sizes"
ACTION_PRESET = "preset_apply"
ACTION_DIMENSIONS = "dimension_change"
ACTION_MATERIAL = "material_change"
ACTION_GLASS_TYPE = "glass_type_change"
ACTION_COLOR = "color_change"


@dataclass
class DesignSnapshot:
    """Grid state captured before an action."""
    action: str
    description: str
    state: dict
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        """Entry metadata without the captured grid state."""
        return {
            "action": self.action,
            "description": self.description,
            "timestamp": self.timestamp,
        }


class DesignHistory:
    """Bounded undo/redo stacks of grid snapshots.

    Args:
        limit: Maximum number of undo snapshots kept
    """

    def __init__(self, limit: int = 50) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._limit = limit
        self._undo: List[DesignSnapshot] = []
        self._redo: List[DesignSnapshot] = []

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def can_undo_merge(self) -> bool:
        return any(s.action == ACTION_MERGE for s in self._undo)

    def entries(self) -> List[DesignSnapshot]:
        """Undo snapshots, oldest first."""
        return list(self._undo)

    def record(self, action: str, description: str, state: dict) -> DesignSnapshot:
        """Push the pre-action state and drop anything redoable."""
        snapshot = DesignSnapshot(action=action, description=description, state=state)
        self._undo.append(snapshot)
        if len(self._undo) > self._limit:
            del self._undo[: len(self._undo) - self._limit]
        self._redo.clear()
        logger.debug(f"History: recorded {action} ({len(self._undo)} entries)")
        return snapshot

    def undo(self, grid: PanelGrid) -> Optional[DesignSnapshot]:
        """Restore the most recent snapshot into ``grid``.

        Returns:
            The snapshot that was undone, or None if there is nothing to undo
        """
        if not self._undo:
            return None
        snapshot = self._undo.pop()
        self._redo.append(DesignSnapshot(snapshot.action, snapshot.description, grid.to_dict()))
        grid.load_state(snapshot.state)
        logger.debug(f"History: undid {snapshot.action}")
        return snapshot

    def redo(self, grid: PanelGrid) -> Optional[DesignSnapshot]:
        """Re-apply the most recently undone action."""
        if not self._redo:
            return None
        snapshot = self._redo.pop()
        self._undo.append(DesignSnapshot(snapshot.action, snapshot.description, grid.to_dict()))
        grid.load_state(snapshot.state)
        logger.debug(f"History: redid {snapshot.action}")
        return snapshot

    def undo_last_merge(self, grid: PanelGrid) -> Optional[DesignSnapshot]:
        """Roll back to the state before the most recent merge.

        Every action recorded after that merge is discarded as well.
        """
        for index in range(len(self._undo) - 1, -1, -1):
            if self._undo[index].action == ACTION_MERGE:
                snapshot = self._undo[index]
                del self._undo[index:]
                self._redo.clear()
                grid.load_state(snapshot.state)
                logger.debug("History: rolled back last merge")
                return snapshot
        return None

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
