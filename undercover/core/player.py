"""
Player class representing a game participant.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from .roles import Role, SpecialRole


@dataclass
class Player:
    """Represents a player seated at the host device."""
    id: str
    name: str
    is_host: bool = False
    sid: Optional[str] = None  # Transport identity, host only

    # Per-game state
    role: Optional[Role] = None
    special_role: Optional[SpecialRole] = None
    special_role_partner: Optional[str] = None
    word: Optional[str] = None
    is_alive: bool = True
    has_revealed: bool = False

    # Cumulative across games in the room
    score: int = 0
    games_played: int = 0
    games_won: int = 0

    def __str__(self) -> str:
        role = self.role.value if self.role else "unassigned"
        return f"{self.name} ({role})"

    @property
    def is_bad_guy(self) -> bool:
        return self.role is not None and self.role.is_bad_guy

    def eliminate(self) -> None:
        """Mark player as eliminated."""
        self.is_alive = False

    def reset_for_new_game(self) -> None:
        """Clear per-game state, keeping cumulative stats."""
        self.role = None
        self.special_role = None
        self.special_role_partner = None
        self.word = None
        self.is_alive = True
        self.has_revealed = False

    def reset_stats(self) -> None:
        self.score = 0
        self.games_played = 0
        self.games_won = 0

    def to_dict(self, show_secrets: bool = False, hide_role: bool = False) -> Dict[str, Any]:
        """
        Serialise the player for callers.

        Args:
            show_secrets: Include role, word and special role; otherwise they are null.
            hide_role: Null out the standard role even when secrets are shown (blind mode).
        """
        role = self.role.value if (show_secrets and self.role and not hide_role) else None
        return {
            "id": self.id,
            "name": self.name,
            "is_alive": self.is_alive,
            "is_host": self.is_host,
            "has_revealed": self.has_revealed,
            "score": self.score,
            "games_played": self.games_played,
            "games_won": self.games_won,
            "role": role,
            "word": self.word if show_secrets else None,
            "special_role": self.special_role.value if (show_secrets and self.special_role) else None,
            "special_role_partner": self.special_role_partner if show_secrets else None,
        }

    def describe(self) -> Dict[str, Any]:
        """Descriptor of an eliminated player, returned with elimination results."""
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value if self.role else None,
            "special_role": self.special_role.value if self.special_role else None,
        }
