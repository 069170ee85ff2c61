"""
UndoManager - Manages undo/redo stacks of design snapshots.

Each history entry is a deep copy of the design document taken immediately
before a mutation. Undo swaps the live document with the newest entry of
the past stack; redo swaps it with the oldest entry of the future stack.
"""

from dataclasses import dataclass
from typing import Optional

from models.circuit import CircuitModel

MAX_HISTORY_DEPTH = 100


@dataclass
class HistoryEntry:
    """A snapshot plus a label for the Edit menu."""

    snapshot: CircuitModel
    description: str = ""


class UndoManager:
    """
    Snapshot history over a single CircuitModel.

    The manager only covers document content (components and wires).
    Selection, tool modes and validation results are never restored.
    """

    def __init__(self, model: CircuitModel, max_depth: int = MAX_HISTORY_DEPTH):
        """
        Initialize the undo manager.

        Args:
            model: The live design document; undo/redo update it in place
            max_depth: Maximum number of snapshots to keep in history (default 100)
        """
        self.model = model
        self.max_depth = max_depth
        self._past: list[HistoryEntry] = []
        self._future: list[HistoryEntry] = []

    def save(self, description: str = "") -> None:
        """
        Push a snapshot of the current document onto the past stack.

        Must be called before the mutation it guards. Clears the future
        stack since a new action invalidates any redo history.
        """
        self._past.append(HistoryEntry(self.model.snapshot(), description))

        # Enforce max depth
        if len(self._past) > self.max_depth:
            self._past.pop(0)

        self._future.clear()

    def undo(self) -> bool:
        """
        Restore the most recent snapshot.

        Returns:
            True if an action was undone, False if the past stack is empty
        """
        if not self._past:
            return False

        entry = self._past.pop()
        self._future.insert(0, HistoryEntry(self.model.snapshot(), entry.description))
        self.model.restore(entry.snapshot)

        return True

    def redo(self) -> bool:
        """
        Re-apply the first snapshot of the future stack.

        Returns:
            True if an action was redone, False if the future stack is empty
        """
        if not self._future:
            return False

        entry = self._future.pop(0)
        self._past.append(HistoryEntry(self.model.snapshot(), entry.description))
        self.model.restore(entry.snapshot)

        return True

    def can_undo(self) -> bool:
        """Return whether there are snapshots to undo."""
        return len(self._past) > 0

    def can_redo(self) -> bool:
        """Return whether there are snapshots to redo."""
        return len(self._future) > 0

    def get_undo_description(self) -> Optional[str]:
        """
        Get description of the action that would be undone.

        Returns:
            Description string or None if the past stack is empty
        """
        if self._past:
            return self._past[-1].description
        return None

    def get_redo_description(self) -> Optional[str]:
        if self._future:
            return self._future[0].description
        return None

    def clear(self) -> None:
        """Clear both stacks."""
        self._past.clear()
        self._future.clear()

    def get_undo_count(self) -> int:
        return len(self._past)

    def get_redo_count(self) -> int:
        return len(self._future)
