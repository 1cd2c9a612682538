"""
Game configuration and constants.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict


@dataclass
class GameConfig:
    """Configuration for room and game parameters."""

    # Room limits
    min_players: int = 3
    max_players: int = 12
    max_undercover: int = 4
    min_civilians: int = 2

    # Identifiers
    room_code_length: int = 4
    room_code_alphabet: str = "ABCDEFGHJKLMNPQRSTUVWXYZ"  # No I/O to avoid misreads

    # Role assignment
    fair_start_max_retries: int = 50
    special_role_min_players: Dict[str, int] = field(default_factory=lambda: {
        "Joy Fool": 3,
        "Revenger": 5,
        "Lover": 5,
        "Duelist": 5,
        "Mr. Meme": 3,
    })
    random_seed: Optional[int] = None  # Seed for reproducible role assignment and draws

    # Undo
    max_undo_depth: Optional[int] = None  # None keeps every snapshot of the current game

    # Host announcements
    use_announcements: bool = True

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3001
    cors_allowed_origins: str = "*"
    custom_words_path: Optional[str] = "custom_words.json"
    default_words_path: Optional[str] = None  # None uses the packaged defaults


# Default configuration instance
default_config = GameConfig()
