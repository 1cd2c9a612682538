"""
Room state: one game session held by the host device.
"""

from enum import Enum
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from .roles import Role, SpecialRole
from .player import Player
from ..words.catalog import WordPair


class RoomStatus(Enum):
    """Current phase of the room."""
    WAITING = "WAITING"
    ROLE_REVEAL = "ROLE_REVEAL"
    PLAYING = "PLAYING"
    MR_WHITE_GUESS = "MR_WHITE_GUESS"
    REVENGER_REVENGE = "REVENGER_REVENGE"
    FINISHED = "FINISHED"

    @property
    def in_game(self) -> bool:
        return self not in (RoomStatus.WAITING, RoomStatus.FINISHED)


@dataclass
class RoomSettings:
    """Host-editable settings, locked once a game starts."""
    undercover_count: int = 1
    include_mr_white: bool = False
    selected_categories: List[str] = field(default_factory=list)
    fair_start: bool = False
    blind_mode: bool = False
    special_roles: List[SpecialRole] = field(default_factory=list)
    special_role_chances: Dict[SpecialRole, int] = field(
        default_factory=lambda: {special_role: 100 for special_role in SpecialRole}
    )

    def is_enabled(self, special_role: SpecialRole) -> bool:
        return special_role in self.special_roles

    def chance_for(self, special_role: SpecialRole) -> int:
        return self.special_role_chances.get(special_role, 100)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "undercover_count": self.undercover_count,
            "include_mr_white": self.include_mr_white,
            "selected_categories": list(self.selected_categories),
            "fair_start": self.fair_start,
            "blind_mode": self.blind_mode,
            "special_roles": [special_role.value for special_role in self.special_roles],
            "special_role_chances": {
                special_role.value: chance for special_role, chance in self.special_role_chances.items()
            },
        }


@dataclass
class SpecialRoleState:
    """Per-game bookkeeping for special roles."""
    joy_fool_id: Optional[str] = None
    revenger_id: Optional[str] = None
    lover_ids: List[str] = field(default_factory=list)
    duelist_ids: List[str] = field(default_factory=list)
    first_eliminated_id: Optional[str] = None
    first_eliminated_duelist_id: Optional[str] = None
    mr_meme_id: Optional[str] = None  # Mime for the current round
    pending_revenger_id: Optional[str] = None  # Revenger choosing a victim


@dataclass
class WinResult:
    """Outcome of a win-condition check."""
    winners: List[Role]
    reason: str


@dataclass
class Room:
    """Complete room state."""
    code: str
    host_sid: Optional[str] = None
    status: RoomStatus = RoomStatus.WAITING
    settings: RoomSettings = field(default_factory=RoomSettings)
    players: List[Player] = field(default_factory=list)
    word_pair: Optional[WordPair] = None
    round: int = 0
    speaking_order: List[Dict[str, str]] = field(default_factory=list)
    mr_white_guesser_id: Optional[str] = None
    special_role_state: SpecialRoleState = field(default_factory=SpecialRoleState)

    # Finished-game score snapshots, survive play-again
    game_history: List[Dict[str, Any]] = field(default_factory=list)
    undo_stack: List[Dict[str, Any]] = field(default_factory=list)

    def get_host(self) -> Optional[Player]:
        for player in self.players:
            if player.is_host:
                return player
        return None

    def is_host(self, sid: Optional[str]) -> bool:
        host = self.get_host()
        return host is not None and sid is not None and host.sid == sid

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_alive_player(self, player_id: str) -> Optional[Player]:
        player = self.get_player(player_id)
        if player and player.is_alive:
            return player
        return None

    def find_player_by_name(self, name: str) -> Optional[Player]:
        """Case-insensitive name lookup."""
        wanted = name.strip().casefold()
        for player in self.players:
            if player.name.casefold() == wanted:
                return player
        return None

    def get_alive_players(self) -> List[Player]:
        """Get all alive players."""
        return [p for p in self.players if p.is_alive]

    def count_alive(self, role: Role) -> int:
        return sum(1 for p in self.players if p.is_alive and p.role == role)

    def update_speaking_order(self) -> None:
        """Speaking order is all alive players in their current seat order."""
        self.speaking_order = [{"id": p.id, "name": p.name} for p in self.get_alive_players()]

    def check_win_condition(self) -> Optional[WinResult]:
        """
        Check if the game has ended and return the winners.
        Returns None if the game continues.
        """
        alive_civilians = self.count_alive(Role.CIVILIAN)
        alive_undercover = self.count_alive(Role.UNDERCOVER)
        alive_mr_white = self.count_alive(Role.MR_WHITE)

        alive_bad_guys = alive_undercover + alive_mr_white

        # Outnumbering needs at least one bad guy alive, so the two branches never overlap
        if alive_bad_guys > 0 and alive_bad_guys >= alive_civilians:
            winners = []
            if alive_undercover > 0:
                winners.append(Role.UNDERCOVER)
            if alive_mr_white > 0:
                winners.append(Role.MR_WHITE)
            return WinResult(winners=winners, reason="The bad guys outnumber the civilians!")

        if alive_bad_guys == 0:
            return WinResult(
                winners=[Role.CIVILIAN],
                reason="All undercover agents and Mr. White have been eliminated!",
            )

        return None

    def get_leaderboard(self) -> List[Dict[str, Any]]:
        """Players sorted by cumulative score, highest first."""
        board = [
            {
                "id": p.id,
                "name": p.name,
                "score": p.score,
                "games_played": p.games_played,
                "games_won": p.games_won,
            }
            for p in self.players
        ]
        board.sort(key=lambda entry: entry["score"], reverse=True)
        return board
