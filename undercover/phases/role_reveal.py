"""
Role reveal: each player privately looks at their role before play begins.
"""

from typing import Any, Callable, Dict

from ..core.player import Player
from ..core.public_view import player_secret
from ..core.room import Room, RoomStatus


class RoleRevealHandler:
    """Tracks reveals and starts play once everyone has seen their role."""

    def __init__(self, announce: Callable[[str], None]):
        self.announce = announce

    def reveal(self, room: Room, player: Player) -> Dict[str, Any]:
        player.has_revealed = True
        secret = player_secret(room, player)

        all_revealed = all(p.has_revealed for p in room.players)
        if all_revealed:
            room.status = RoomStatus.PLAYING
            room.update_speaking_order()
            self.announce(f"Everyone has seen their role. Round {room.round} begins in room {room.code}.")

        return {"secret": secret, "all_revealed": all_revealed}
