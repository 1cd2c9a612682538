"""
Phase handlers for role reveal, eliminations, revenge and Mr. White's guess.
"""

from .resolution import RoundResolver
from .role_reveal import RoleRevealHandler
from .elimination import EliminationHandler
from .revenge import RevengeHandler
from .mr_white_guess import MrWhiteGuessHandler, normalize_guess

__all__ = [
    'RoundResolver',
    'RoleRevealHandler',
    'EliminationHandler',
    'RevengeHandler',
    'MrWhiteGuessHandler',
    'normalize_guess',
]
