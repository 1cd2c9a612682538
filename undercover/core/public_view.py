"""
Redacted room views handed to callers and shared displays.
"""

from typing import Dict, Any

from .roles import Role
from .player import Player
from .room import Room, RoomStatus


def _hides_role(room: Room, player: Player) -> bool:
    """Blind mode keeps civilians and undercovers unaware of their faction until the end."""
    return (
        room.settings.blind_mode
        and room.status != RoomStatus.FINISHED
        and player.role != Role.MR_WHITE
    )


def player_secret(room: Room, player: Player) -> Dict[str, Any]:
    """What a single player sees on the reveal screen."""
    hide_role = _hides_role(room, player)
    return {
        "id": player.id,
        "name": player.name,
        "role": None if (hide_role or player.role is None) else player.role.value,
        "word": player.word,
        "special_role": player.special_role.value if player.special_role else None,
        "special_role_partner": player.special_role_partner,
        "is_mr_meme": room.special_role_state.mr_meme_id == player.id,
    }


def public_room_view(room: Room, privileged: bool = False) -> Dict[str, Any]:
    """
    Serialise a room. Roles, words and special roles are only included during
    role reveal, once the game is finished, or for privileged callers.
    """
    show_secrets = privileged or room.status in (RoomStatus.ROLE_REVEAL, RoomStatus.FINISHED)
    state = room.special_role_state

    return {
        "code": room.code,
        "status": room.status.value,
        "round": room.round,
        "settings": room.settings.to_dict(),
        "speaking_order": list(room.speaking_order),
        "players": [
            p.to_dict(show_secrets=show_secrets, hide_role=_hides_role(room, p))
            for p in room.players
        ],
        "mr_white_guesser_id": room.mr_white_guesser_id,
        "revenger_id": state.pending_revenger_id,
        "mr_meme_id": state.mr_meme_id,
        "word_pair": room.word_pair.to_dict() if (room.status == RoomStatus.FINISHED and room.word_pair) else None,
        "leaderboard": room.get_leaderboard(),
        "games_played_total": len(room.game_history),
        "can_undo": bool(room.undo_stack),
    }
