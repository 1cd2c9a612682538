"""
Host-entered vote outcomes: eliminating a player or skipping on a tie.
"""

from typing import Any, Dict

from ..core.roles import SpecialRole
from ..core.player import Player
from ..core.room import Room, RoomStatus
from .resolution import RoundResolver, describe_victims


class EliminationHandler:
    """Handles the result of a vote during PLAYING."""

    def __init__(self, resolver: RoundResolver):
        self.resolver = resolver

    def eliminate(self, room: Room, player: Player) -> Dict[str, Any]:
        victims = self.resolver.kill(room, player)
        self.resolver.announce(f"{player.name} has been voted out.")
        extras = describe_victims(victims)

        # A Revenger is never Mr. White and never a Lover
        if player.special_role == SpecialRole.REVENGER and room.get_alive_players():
            room.status = RoomStatus.REVENGER_REVENGE
            room.special_role_state.pending_revenger_id = player.id
            self.resolver.announce(f"{player.name} was the Revenger and takes someone down with them.")
            extras["revenge_pending"] = True
            return extras

        extras.update(self.resolver.settle(room, victims))
        return extras

    def skip(self, room: Room) -> Dict[str, Any]:
        """Tie vote: nobody leaves, the next round starts."""
        self.resolver.announce("The vote was tied. Nobody is eliminated.")
        extras: Dict[str, Any] = {"skipped": True}
        extras.update(self.resolver.advance_round(room))
        return extras
