"""
Precondition checks shared by the registry and the game engine.
"""

import functools
from typing import Callable, Iterable, Optional

from .exceptions import ActionRejected, RejectReason
from .player import Player
from .results import ActionResult
from .room import Room, RoomStatus


def rejections_as_results(method: Callable[..., ActionResult]) -> Callable[..., ActionResult]:
    """Turn an ActionRejected raised by a precondition into a failed ActionResult."""
    @functools.wraps(method)
    def wrapper(*args, **kwargs) -> ActionResult:
        try:
            return method(*args, **kwargs)
        except ActionRejected as rejection:
            return ActionResult.rejected(rejection)
    return wrapper


def require_host(room: Room, sid: Optional[str], message: str) -> None:
    if not room.is_host(sid):
        raise ActionRejected(RejectReason.NOT_HOST, message)


def require_status(room: Room, statuses: Iterable[RoomStatus], message: str) -> None:
    if room.status not in tuple(statuses):
        raise ActionRejected(RejectReason.WRONG_PHASE, message)


def require_alive_player(room: Room, player_id: Optional[str]) -> Player:
    player = room.get_alive_player(player_id) if player_id else None
    if player is None:
        raise ActionRejected(RejectReason.PLAYER_NOT_FOUND, "Player not found or already eliminated")
    return player
