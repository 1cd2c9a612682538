"""
Result of a core operation, returned to the transport layer.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

from .exceptions import ActionRejected, RejectReason
from .room import Room


@dataclass
class ActionResult:
    """Success payload or typed rejection of an operation."""
    success: bool
    room: Optional[Room] = None
    error: Optional[str] = None
    reason: Optional[RejectReason] = None
    privileged: bool = False  # Room view may include secrets

    # Transition-specific extras; only the ones that are set get serialised
    player: Optional[Dict[str, Any]] = None
    secret: Optional[Dict[str, Any]] = None
    all_revealed: Optional[bool] = None
    eliminated: Optional[Dict[str, Any]] = None
    linked_eliminations: Optional[List[Dict[str, Any]]] = None
    skipped: Optional[bool] = None
    mr_white_chance: Optional[bool] = None
    revenge_pending: Optional[bool] = None
    correct: Optional[bool] = None
    guess: Optional[str] = None
    continue_game: Optional[bool] = None
    game_over: Optional[bool] = None
    winners: Optional[List[str]] = None
    win_reason: Optional[str] = None
    word_pair: Optional[Dict[str, Any]] = None
    score_results: Optional[List[Dict[str, Any]]] = None
    leaderboard: Optional[List[Dict[str, Any]]] = None
    mr_meme: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, room: Room, **extras) -> "ActionResult":
        return cls(success=True, room=room, **extras)

    @classmethod
    def rejected(cls, error: ActionRejected) -> "ActionResult":
        return cls(success=False, error=error.message, reason=error.reason)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise everything except the room, which callers render separately."""
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "reason": self.reason.value if self.reason else None,
            }
        payload: Dict[str, Any] = {"success": True}
        for item in fields(self):
            if item.name in ("success", "room", "error", "reason", "privileged"):
                continue
            value = getattr(self, item.name)
            if value is not None:
                payload[item.name] = value
        return payload
