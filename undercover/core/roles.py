"""
Role definitions for the Undercover game.
"""

from enum import Enum
from typing import List


class Role(Enum):
    """Standard role (faction) of a player."""
    CIVILIAN = "Civilian"
    UNDERCOVER = "Undercover"
    MR_WHITE = "Mr. White"

    @property
    def is_bad_guy(self) -> bool:
        """Undercover and Mr. White play against the civilians."""
        return self in (Role.UNDERCOVER, Role.MR_WHITE)


class SpecialRole(Enum):
    """Optional secondary role layered on top of a standard role."""
    JOY_FOOL = "Joy Fool"
    LOVER = "Lover"
    REVENGER = "Revenger"
    DUELIST = "Duelist"
    MR_MEME = "Mr. Meme"  # Per-round, never stored on a player


# Order in which special roles are rolled at game start
ASSIGNABLE_SPECIAL_ROLES = [
    SpecialRole.JOY_FOOL,
    SpecialRole.REVENGER,
    SpecialRole.LOVER,
    SpecialRole.DUELIST,
]


def build_role_pool(player_count: int, undercover_count: int, include_mr_white: bool) -> List[Role]:
    """
    Build the unshuffled multiset of standard roles for a game.
    Bad roles first, then civilians up to the player count.
    """
    roles = [Role.UNDERCOVER] * undercover_count
    if include_mr_white:
        roles.append(Role.MR_WHITE)
    while len(roles) < player_count:
        roles.append(Role.CIVILIAN)
    return roles


def bad_role_count(undercover_count: int, include_mr_white: bool) -> int:
    return undercover_count + (1 if include_mr_white else 0)


def parse_special_role(value) -> SpecialRole:
    """Accept either an enum member, its value ("Joy Fool") or its name ("JOY_FOOL")."""
    if isinstance(value, SpecialRole):
        return value
    text = str(value).strip()
    for special_role in SpecialRole:
        if text == special_role.value or text.upper() == special_role.name:
            return special_role
    raise ValueError(f"Unknown special role: {value}")
