"""
Room code and player id generation.
"""

import itertools
import random
import time
from threading import Lock
from typing import Callable, Optional

from ..config.game_config import GameConfig, default_config


class IdGenerator:
    """Produces room codes unique among live rooms and process-unique player ids."""

    def __init__(self, config: GameConfig = default_config, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or random.Random()
        self._counter = itertools.count(1)
        self._lock = Lock()

    def new_player_id(self) -> str:
        with self._lock:
            number = next(self._counter)
        return f"player_{number}_{int(time.time() * 1000)}"

    def new_room_code(self, is_taken: Callable[[str], bool]) -> str:
        """Draw codes until one is not taken by a live room."""
        alphabet = self.config.room_code_alphabet
        while True:
            code = "".join(self.rng.choice(alphabet) for _ in range(self.config.room_code_length))
            if not is_taken(code):
                return code
