"""
Typed rejections for core operations.
"""

from enum import Enum


class RejectReason(Enum):
    """Why an operation was refused. Every rejection leaves the room untouched."""
    ROOM_NOT_FOUND = "room_not_found"
    NOT_HOST = "not_host"
    WRONG_PHASE = "wrong_phase"
    PLAYER_NOT_FOUND = "player_not_found"
    INVALID_INPUT = "invalid_input"
    NAME_TAKEN = "name_taken"
    ROOM_FULL = "room_full"
    NOT_ENOUGH_PLAYERS = "not_enough_players"
    TOO_MANY_BAD_ROLES = "too_many_bad_roles"
    NO_CATEGORIES = "no_categories"
    WORD_CATALOG_EMPTY = "word_catalog_empty"
    NOTHING_TO_UNDO = "nothing_to_undo"


class ActionRejected(Exception):
    """Raised by precondition checks before any mutation happens."""

    def __init__(self, reason: RejectReason, message: str):
        self.reason = reason
        self.message = message
        super().__init__(message)
