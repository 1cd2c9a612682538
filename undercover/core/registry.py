"""
Registry of live rooms and lobby membership changes.
"""

from threading import RLock
from typing import Dict, List, Optional

from .exceptions import ActionRejected, RejectReason
from .guards import rejections_as_results, require_host, require_status
from .identifiers import IdGenerator
from .player import Player
from .results import ActionResult
from .room import Room, RoomSettings, RoomStatus
from ..config.game_config import GameConfig, default_config
from ..words.catalog import WordCatalog


class RoomRegistry:
    """
    Keyed store of rooms. The code-to-room map is safe to use from several
    threads; a single room's internals are only touched by its host.
    """

    def __init__(self, config: GameConfig = default_config, id_generator: Optional[IdGenerator] = None,
                 catalog: Optional[WordCatalog] = None):
        self.config = config
        self.ids = id_generator or IdGenerator(config)
        self.catalog = catalog
        self._lock = RLock()
        self._rooms: Dict[str, Room] = {}

    # ------------------------------
    # Rooms
    # ------------------------------
    @rejections_as_results
    def create_room(self, host_sid: str, host_name: str) -> ActionResult:
        """Create a room with the caller as its host player."""
        name = (host_name or "").strip()
        if not name:
            raise ActionRejected(RejectReason.INVALID_INPUT, "Player name is required")

        categories = self.catalog.category_names() if self.catalog else []
        host = Player(id=self.ids.new_player_id(), name=name, is_host=True, sid=host_sid)
        with self._lock:
            code = self.ids.new_room_code(lambda candidate: candidate in self._rooms)
            room = Room(
                code=code,
                host_sid=host_sid,
                settings=RoomSettings(selected_categories=categories),
                players=[host],
            )
            self._rooms[code] = room
        return ActionResult.ok(room, player=host.to_dict())

    def get_room(self, code: Optional[str]) -> Optional[Room]:
        if not code:
            return None
        with self._lock:
            return self._rooms.get(code.strip().upper())

    def require_room(self, code: Optional[str]) -> Room:
        room = self.get_room(code)
        if room is None:
            raise ActionRejected(RejectReason.ROOM_NOT_FOUND, "Room not found")
        return room

    def leave(self, sid: str) -> List[str]:
        """Tear down every room hosted by a disconnecting connection. Returns deleted codes."""
        with self._lock:
            codes = [code for code, room in self._rooms.items() if room.host_sid == sid]
            for code in codes:
                del self._rooms[code]
        return codes

    def room_count(self) -> int:
        with self._lock:
            return len(self._rooms)

    def list_codes(self) -> List[str]:
        with self._lock:
            return list(self._rooms)

    # ------------------------------
    # Lobby membership
    # ------------------------------
    @rejections_as_results
    def add_player(self, code: str, sid: str, player_name: str) -> ActionResult:
        room = self.require_room(code)
        require_host(room, sid, "Only host can add players")
        require_status(room, [RoomStatus.WAITING], "Game already in progress")

        name = (player_name or "").strip()
        if not name:
            raise ActionRejected(RejectReason.INVALID_INPUT, "Player name is required")
        if room.find_player_by_name(name):
            raise ActionRejected(RejectReason.NAME_TAKEN, "Name already taken")
        if len(room.players) >= self.config.max_players:
            raise ActionRejected(RejectReason.ROOM_FULL, f"Room is full (max {self.config.max_players} players)")

        player = Player(id=self.ids.new_player_id(), name=name)
        room.players.append(player)
        return ActionResult.ok(room, player=player.to_dict())

    @rejections_as_results
    def remove_player(self, code: str, sid: str, player_id: str) -> ActionResult:
        room = self.require_room(code)
        require_host(room, sid, "Only host can remove players")
        require_status(room, [RoomStatus.WAITING], "Cannot remove players during game")

        player = room.get_player(player_id)
        if player is None:
            raise ActionRejected(RejectReason.PLAYER_NOT_FOUND, "Player not found")
        if player.is_host:
            raise ActionRejected(RejectReason.INVALID_INPUT, "Cannot remove the host")

        room.players.remove(player)
        return ActionResult.ok(room, player=player.to_dict())
