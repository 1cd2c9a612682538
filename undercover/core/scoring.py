"""
End-of-game scoring and cumulative leaderboard.
"""

from typing import List, Dict, Any

from .roles import Role, SpecialRole
from .player import Player
from .room import Room


WIN_POINTS = 10
SURVIVAL_BONUS = 5
CORRECT_GUESS_BONUS = 5
CONSOLATION_POINTS = 2
JOY_FOOL_BONUS = 4
DUEL_POINTS = 2


class ScoringEngine:
    """Awards points once per finished game and archives the result."""

    def award_points(self, room: Room, winners: List[Role], mr_white_correct_guess: bool = False) -> List[Dict[str, Any]]:
        """
        Update every player's score and counters in place.

        Returns:
            Per-player breakdowns, highest points this game first.
        """
        state = room.special_role_state
        results = []

        for player in room.players:
            player.games_played += 1
            points = 0
            breakdown = []

            is_winner = player.role in winners
            if is_winner:
                player.games_won += 1
                points += WIN_POINTS
                breakdown.append(f"+{WIN_POINTS} Win")
                if player.is_alive:
                    points += SURVIVAL_BONUS
                    breakdown.append(f"+{SURVIVAL_BONUS} Survived")
            elif player.is_alive and player.is_bad_guy:
                points += CONSOLATION_POINTS
                breakdown.append(f"+{CONSOLATION_POINTS} Survived")

            if mr_white_correct_guess and player.role == Role.MR_WHITE:
                points += CORRECT_GUESS_BONUS
                breakdown.append(f"+{CORRECT_GUESS_BONUS} Correct Guess")

            if player.special_role == SpecialRole.JOY_FOOL and state.first_eliminated_id == player.id:
                points += JOY_FOOL_BONUS
                breakdown.append(f"+{JOY_FOOL_BONUS} Joy Fool First Out")

            points += self._duel_points(room, player, breakdown)

            player.score += points
            results.append(self._result_line(player, points, breakdown))

        results.sort(key=lambda line: line["points_this_game"], reverse=True)

        room.game_history.append({
            "game": len(room.game_history) + 1,
            "winners": [role.value for role in winners],
            "word_pair": room.word_pair.to_dict() if room.word_pair else None,
            "scores": results,
        })
        return results

    @staticmethod
    def _duel_points(room: Room, player: Player, breakdown: List[str]) -> int:
        """Loser of the duel is whichever duelist died first; unresolved duels score nothing."""
        state = room.special_role_state
        if player.id not in state.duelist_ids or state.first_eliminated_duelist_id is None:
            return 0
        if state.first_eliminated_duelist_id == player.id:
            breakdown.append(f"-{DUEL_POINTS} Lost Duel")
            return -DUEL_POINTS
        breakdown.append(f"+{DUEL_POINTS} Won Duel")
        return DUEL_POINTS

    @staticmethod
    def _result_line(player: Player, points: int, breakdown: List[str]) -> Dict[str, Any]:
        return {
            "id": player.id,
            "name": player.name,
            "role": player.role.value if player.role else None,
            "special_role": player.special_role.value if player.special_role else None,
            "points_this_game": points,
            "breakdown": breakdown,
            "total_score": player.score,
            "games_played": player.games_played,
            "games_won": player.games_won,
        }

    @staticmethod
    def reset_scores(room: Room) -> None:
        """Start a new scoring session for the room."""
        room.game_history = []
        for player in room.players:
            player.reset_stats()
