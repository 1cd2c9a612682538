"""
Mr. White's guess of the civilian word after being eliminated.
"""

from typing import Any, Dict

from ..core.roles import Role
from ..core.player import Player
from ..core.room import Room, WinResult
from .resolution import RoundResolver


def normalize_guess(text: str) -> str:
    """Case-insensitive, with surrounding and repeated whitespace ignored."""
    return " ".join((text or "").split()).casefold()


class MrWhiteGuessHandler:
    """Resolves the MR_WHITE_GUESS phase."""

    def __init__(self, resolver: RoundResolver):
        self.resolver = resolver

    def guess(self, room: Room, mr_white: Player, guess: str) -> Dict[str, Any]:
        civilian_word = room.word_pair.civilian
        correct = normalize_guess(guess) == normalize_guess(civilian_word)
        extras: Dict[str, Any] = {"correct": correct, "guess": guess}

        if correct:
            # A correct guess wins outright, whoever else is still alive
            win = WinResult(
                winners=[Role.MR_WHITE],
                reason=f'Mr. White ({mr_white.name}) correctly guessed the word: "{civilian_word}"!',
            )
            extras.update(self.resolver.finish(room, win, mr_white_correct_guess=True))
            return extras

        self.resolver.announce(f"{mr_white.name} guessed \"{guess}\", which is wrong.")
        room.mr_white_guesser_id = None
        extras.update(self.resolver.settle_without_guess(room))
        return extras
