"""
Snapshot-based undo of elimination-phase actions.
"""

import copy
from typing import Optional

from .room import Room


# Room fields replaced wholesale on undo
SNAPSHOT_FIELDS = (
    "status",
    "players",
    "speaking_order",
    "round",
    "mr_white_guesser_id",
    "word_pair",
    "special_role_state",
)


class UndoManager:
    """Pushes deep copies of the mutable room fields and restores them on demand."""

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = max_depth

    def push(self, room: Room) -> None:
        """Capture the room as it is right before a mutation."""
        snapshot = {name: copy.deepcopy(getattr(room, name)) for name in SNAPSHOT_FIELDS}
        # Scoring appends to the history, so a game-ending action must be able to take it back
        snapshot["game_history_length"] = len(room.game_history)
        room.undo_stack.append(snapshot)
        if self.max_depth is not None and len(room.undo_stack) > self.max_depth:
            del room.undo_stack[0]

    def pop(self, room: Room) -> bool:
        """Restore the most recent snapshot. Returns False if there is nothing to undo."""
        if not room.undo_stack:
            return False
        snapshot = room.undo_stack.pop()
        for name in SNAPSHOT_FIELDS:
            setattr(room, name, snapshot[name])
        del room.game_history[snapshot["game_history_length"]:]
        return True

    @staticmethod
    def clear(room: Room) -> None:
        room.undo_stack.clear()
