"""
Revenger's last action: take one living player down with them.
"""

from typing import Any, Dict

from ..core.player import Player
from ..core.room import Room
from .resolution import RoundResolver, describe_victims


class RevengeHandler:
    """Resolves the REVENGER_REVENGE phase."""

    def __init__(self, resolver: RoundResolver):
        self.resolver = resolver

    def take_revenge(self, room: Room, revenger: Player, victim: Player) -> Dict[str, Any]:
        room.special_role_state.pending_revenger_id = None
        victims = self.resolver.kill(room, victim)
        self.resolver.announce(f"{revenger.name} takes revenge on {victim.name}.")
        extras = describe_victims(victims)
        extras.update(self.resolver.settle(room, victims))
        return extras
