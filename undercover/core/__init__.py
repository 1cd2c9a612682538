"""
Core game components: rooms, players, roles, assignment, scoring and undo.

The GameEngine lives in ``undercover.core.game_engine``; it depends on the
phase handlers, which in turn build on the models exported here.
"""

from .roles import Role, SpecialRole
from .player import Player
from .room import Room, RoomSettings, RoomStatus, SpecialRoleState, WinResult
from .exceptions import ActionRejected, RejectReason
from .results import ActionResult
from .identifiers import IdGenerator
from .role_assignment import RoleAssigner
from .scoring import ScoringEngine
from .undo import UndoManager
from .registry import RoomRegistry
from .public_view import public_room_view, player_secret

__all__ = [
    'Role',
    'SpecialRole',
    'Player',
    'Room',
    'RoomSettings',
    'RoomStatus',
    'SpecialRoleState',
    'WinResult',
    'ActionRejected',
    'RejectReason',
    'ActionResult',
    'IdGenerator',
    'RoleAssigner',
    'ScoringEngine',
    'UndoManager',
    'RoomRegistry',
    'public_room_view',
    'player_secret',
]
