"""
Shared elimination bookkeeping and round settlement.
"""

from typing import Callable, Dict, Any, List, Optional

from ..core.roles import Role, SpecialRole
from ..core.player import Player
from ..core.room import Room, RoomStatus, WinResult
from ..core.role_assignment import RoleAssigner
from ..core.scoring import ScoringEngine


class RoundResolver:
    """Applies deaths with their side effects and decides where the game goes next."""

    def __init__(self, assigner: RoleAssigner, scorer: ScoringEngine, announce: Callable[[str], None]):
        self.assigner = assigner
        self.scorer = scorer
        self.announce = announce

    def kill(self, room: Room, player: Player) -> List[Player]:
        """
        Eliminate a player together with their living Lover partner.
        Returns every player who died, primary first.
        """
        victims = [player]
        player.eliminate()

        if player.special_role == SpecialRole.LOVER:
            for lover_id in room.special_role_state.lover_ids:
                partner = room.get_alive_player(lover_id)
                if partner is not None and partner is not player:
                    partner.eliminate()
                    victims.append(partner)
                    self.announce(f"{partner.name} dies of heartbreak alongside {player.name}.")

        state = room.special_role_state
        for victim in victims:
            if state.first_eliminated_id is None:
                state.first_eliminated_id = victim.id
            if victim.id in state.duelist_ids and state.first_eliminated_duelist_id is None:
                state.first_eliminated_duelist_id = victim.id

        return victims

    def settle(self, room: Room, victims: List[Player]) -> Dict[str, Any]:
        """
        Resolve the phase after deaths: Mr. White gets a guess first, then the
        win condition is checked once, otherwise the next round begins.
        """
        mr_white = next((p for p in victims if p.role == Role.MR_WHITE), None)
        if mr_white is not None:
            room.status = RoomStatus.MR_WHITE_GUESS
            room.mr_white_guesser_id = mr_white.id
            self.announce(f"{mr_white.name} was Mr. White and may guess the civilian word.")
            return {"mr_white_chance": True}

        return self.settle_without_guess(room)

    def settle_without_guess(self, room: Room) -> Dict[str, Any]:
        win = room.check_win_condition()
        if win is not None:
            return self.finish(room, win)
        return self.advance_round(room)

    def advance_round(self, room: Room) -> Dict[str, Any]:
        room.status = RoomStatus.PLAYING
        room.round += 1
        room.update_speaking_order()
        mime = self.assigner.draw_mr_meme(room)
        self.announce(f"Round {room.round} begins.")
        extras: Dict[str, Any] = {"continue_game": True}
        if mime is not None:
            extras["mr_meme"] = {"id": mime.id, "name": mime.name}
        return extras

    def finish(self, room: Room, win: WinResult, mr_white_correct_guess: bool = False) -> Dict[str, Any]:
        room.status = RoomStatus.FINISHED
        room.special_role_state.pending_revenger_id = None
        room.special_role_state.mr_meme_id = None
        score_results = self.scorer.award_points(room, win.winners, mr_white_correct_guess)
        winners = [role.value for role in win.winners]
        self.announce(f"Game over in room {room.code}. Winners: {', '.join(winners)}. {win.reason}")
        return {
            "game_over": True,
            "winners": winners,
            "win_reason": win.reason,
            "word_pair": room.word_pair.to_dict() if room.word_pair else None,
            "score_results": score_results,
            "leaderboard": room.get_leaderboard(),
        }


def describe_victims(victims: List[Player]) -> Dict[str, Any]:
    """Split victims into the primary elimination and the linked ones."""
    primary: Optional[Player] = victims[0] if victims else None
    return {
        "eliminated": primary.describe() if primary else None,
        "linked_eliminations": [victim.describe() for victim in victims[1:]],
    }
