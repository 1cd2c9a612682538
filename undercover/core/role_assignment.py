"""
Role assignment: standard roles, special roles, seating order and the per-round mime.
"""

import random
from typing import List, Optional

from .roles import Role, SpecialRole, ASSIGNABLE_SPECIAL_ROLES, build_role_pool
from .player import Player
from .room import Room, SpecialRoleState
from ..config.game_config import GameConfig, default_config
from ..words.catalog import WordPair


class RoleAssigner:
    """Assigns hidden roles using an injected random source."""

    def __init__(self, config: GameConfig = default_config, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or random.Random()

    def assign(self, room: Room) -> None:
        """
        Assign standard and special roles, then shuffle the seating order.
        Validation of player and role counts is the caller's job.
        """
        settings = room.settings
        roles = build_role_pool(len(room.players), settings.undercover_count, settings.include_mr_white)
        self.rng.shuffle(roles)
        for player, role in zip(room.players, roles):
            player.role = role
            player.special_role = None
            player.special_role_partner = None

        room.special_role_state = SpecialRoleState()
        for special_role in ASSIGNABLE_SPECIAL_ROLES:
            if not settings.is_enabled(special_role):
                continue
            if not self.roll(settings.chance_for(special_role)):
                continue
            if len(room.players) < self.min_players_for(special_role):
                continue
            self._assign_special_role(room, special_role)

        self.shuffle_seating(room)

    def roll(self, chance: int) -> bool:
        """Probability roll on a 0-100 scale; 100 always passes, 0 never does."""
        if chance >= 100:
            return True
        if chance <= 0:
            return False
        return self.rng.random() * 100 < chance

    def min_players_for(self, special_role: SpecialRole) -> int:
        return self.config.special_role_min_players.get(special_role.value, self.config.min_players)

    def _unassigned(self, room: Room) -> List[Player]:
        return [p for p in room.players if p.special_role is None]

    def _assign_special_role(self, room: Room, special_role: SpecialRole) -> None:
        state = room.special_role_state
        unassigned = self._unassigned(room)

        if special_role == SpecialRole.JOY_FOOL:
            if unassigned:
                fool = self.rng.choice(unassigned)
                fool.special_role = SpecialRole.JOY_FOOL
                state.joy_fool_id = fool.id

        elif special_role == SpecialRole.REVENGER:
            # Mr. White already gets a last action when eliminated
            candidates = [p for p in unassigned if p.role != Role.MR_WHITE]
            if candidates:
                revenger = self.rng.choice(candidates)
                revenger.special_role = SpecialRole.REVENGER
                state.revenger_id = revenger.id

        elif special_role == SpecialRole.LOVER:
            # At least one lover must be a civilian
            civilians = [p for p in unassigned if p.role == Role.CIVILIAN]
            if not civilians:
                return
            first = self.rng.choice(civilians)
            others = [p for p in unassigned if p is not first]
            if not others:
                return
            second = self.rng.choice(others)
            self._pair(first, second, SpecialRole.LOVER)
            state.lover_ids = [first.id, second.id]

        elif special_role == SpecialRole.DUELIST:
            if len(unassigned) < 2:
                return
            first, second = self.rng.sample(unassigned, 2)
            self._pair(first, second, SpecialRole.DUELIST)
            state.duelist_ids = [first.id, second.id]

    @staticmethod
    def _pair(first: Player, second: Player, special_role: SpecialRole) -> None:
        first.special_role = special_role
        second.special_role = special_role
        first.special_role_partner = second.name
        second.special_role_partner = first.name

    def shuffle_seating(self, room: Room) -> None:
        """Shuffle the players themselves; fair start keeps Mr. White off the first seat."""
        self.rng.shuffle(room.players)
        if not room.settings.fair_start:
            return
        if not any(p.role == Role.MR_WHITE for p in room.players):
            return
        retries = 0
        while room.players[0].role == Role.MR_WHITE and retries < self.config.fair_start_max_retries:
            self.rng.shuffle(room.players)
            retries += 1

    def deal_words(self, room: Room, word_pair: WordPair) -> None:
        room.word_pair = word_pair
        for player in room.players:
            if player.role == Role.CIVILIAN:
                player.word = word_pair.civilian
            elif player.role == Role.UNDERCOVER:
                player.word = word_pair.undercover
            else:
                player.word = None

    def draw_mr_meme(self, room: Room) -> Optional[Player]:
        """
        Pick this round's mime, or nobody. Mr. White is never eligible: miming
        would hide that they have no word.
        """
        state = room.special_role_state
        state.mr_meme_id = None
        settings = room.settings
        if not settings.is_enabled(SpecialRole.MR_MEME):
            return None
        if len(room.players) < self.min_players_for(SpecialRole.MR_MEME):
            return None
        if not self.roll(settings.chance_for(SpecialRole.MR_MEME)):
            return None
        eligible = [p for p in room.get_alive_players() if p.role != Role.MR_WHITE]
        if not eligible:
            return None
        mime = self.rng.choice(eligible)
        state.mr_meme_id = mime.id
        return mime
