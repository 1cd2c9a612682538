"""
Core game engine: the room state machine driven by the host's input.
"""

import random
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .roles import bad_role_count, parse_special_role
from .exceptions import ActionRejected, RejectReason
from .guards import rejections_as_results, require_alive_player, require_host, require_status
from .public_view import public_room_view
from .registry import RoomRegistry
from .results import ActionResult
from .role_assignment import RoleAssigner
from .room import Room, RoomSettings, RoomStatus, SpecialRoleState
from .scoring import ScoringEngine
from .undo import UndoManager
from ..config.game_config import GameConfig, default_config
from ..phases import (
    RoundResolver,
    RoleRevealHandler,
    EliminationHandler,
    RevengeHandler,
    MrWhiteGuessHandler,
)
from ..words.catalog import WordCatalog, WordCatalogError

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


class GameEngine:
    """
    One method per state transition. Every method returns an ActionResult and
    checks all preconditions before touching the room.
    """

    def __init__(self, registry: RoomRegistry, catalog: WordCatalog, config: GameConfig = default_config,
                 rng: Optional[random.Random] = None, event_emitter: Optional['EventEmitter'] = None):
        self.registry = registry
        self.catalog = catalog
        self.config = config
        self.rng = rng or random.Random(config.random_seed)
        self.event_emitter = event_emitter
        self.announcements: List[str] = []

        self.assigner = RoleAssigner(config, self.rng)
        self.scorer = ScoringEngine()
        self.undo_manager = UndoManager(config.max_undo_depth)

        # Phase handlers
        self.resolver = RoundResolver(self.assigner, self.scorer, self.announce)
        self.reveal_handler = RoleRevealHandler(self.announce)
        self.elimination_handler = EliminationHandler(self.resolver)
        self.revenge_handler = RevengeHandler(self.resolver)
        self.guess_handler = MrWhiteGuessHandler(self.resolver)

    def announce(self, message: str) -> None:
        """Make a host announcement."""
        if self.config.use_announcements:
            self.announcements.append(message)
            print(f"[HOST] {message}")

    # ------------------------------
    # Lobby
    # ------------------------------
    @rejections_as_results
    def update_settings(self, code: str, sid: str, changes: Dict[str, Any]) -> ActionResult:
        room = self.registry.require_room(code)
        require_host(room, sid, "Only host can change settings")
        require_status(room, [RoomStatus.WAITING], "Cannot change settings during game")

        room.settings = self._merge_settings(room.settings, changes or {})
        return ActionResult.ok(room)

    def _merge_settings(self, current: RoomSettings, changes: Dict[str, Any]) -> RoomSettings:
        """Validate every change into a new settings object so a bad field changes nothing."""
        settings = RoomSettings(
            undercover_count=current.undercover_count,
            include_mr_white=current.include_mr_white,
            selected_categories=list(current.selected_categories),
            fair_start=current.fair_start,
            blind_mode=current.blind_mode,
            special_roles=list(current.special_roles),
            special_role_chances=dict(current.special_role_chances),
        )

        if "undercover_count" in changes:
            try:
                count = int(changes["undercover_count"])
            except (TypeError, ValueError):
                raise ActionRejected(RejectReason.INVALID_INPUT, "Undercover count must be a number")
            if not 1 <= count <= self.config.max_undercover:
                raise ActionRejected(
                    RejectReason.INVALID_INPUT,
                    f"Undercover count must be between 1 and {self.config.max_undercover}",
                )
            settings.undercover_count = count

        for flag in ("include_mr_white", "fair_start", "blind_mode"):
            if flag in changes:
                setattr(settings, flag, bool(changes[flag]))

        if "selected_categories" in changes:
            requested = changes["selected_categories"] or []
            known = set(self.catalog.category_names())
            settings.selected_categories = [name for name in requested if name in known]

        try:
            if "special_roles" in changes:
                enabled = [parse_special_role(value) for value in changes["special_roles"] or []]
                settings.special_roles = list(dict.fromkeys(enabled))
            for key, value in (changes.get("special_role_chances") or {}).items():
                chance = int(value)
                if not 0 <= chance <= 100:
                    raise ValueError(f"Chance for {key} must be between 0 and 100")
                settings.special_role_chances[parse_special_role(key)] = chance
        except (TypeError, ValueError) as e:
            raise ActionRejected(RejectReason.INVALID_INPUT, str(e))

        return settings

    @rejections_as_results
    def start_game(self, code: str, sid: str) -> ActionResult:
        room = self.registry.require_room(code)
        require_host(room, sid, "Only host can start the game")
        require_status(room, [RoomStatus.WAITING], "Game already in progress")

        player_count = len(room.players)
        settings = room.settings
        if player_count < self.config.min_players:
            raise ActionRejected(
                RejectReason.NOT_ENOUGH_PLAYERS,
                f"Need at least {self.config.min_players} players to start",
            )
        bad_guys = bad_role_count(settings.undercover_count, settings.include_mr_white)
        if player_count - bad_guys < self.config.min_civilians:
            raise ActionRejected(RejectReason.TOO_MANY_BAD_ROLES, f"Too many special roles for {player_count} players.")
        if not settings.selected_categories:
            raise ActionRejected(RejectReason.NO_CATEGORIES, "Select at least one category")
        try:
            word_pair = self.catalog.draw(settings.selected_categories, self.rng)
        except WordCatalogError as e:
            raise ActionRejected(RejectReason.WORD_CATALOG_EMPTY, str(e))

        for player in room.players:
            player.reset_for_new_game()
        self.assigner.assign(room)
        self.assigner.deal_words(room, word_pair)

        room.status = RoomStatus.ROLE_REVEAL
        room.round = 1
        room.mr_white_guesser_id = None
        room.update_speaking_order()
        self.undo_manager.clear(room)
        mime = self.assigner.draw_mr_meme(room)

        self.announce(f"Game started in room {room.code} with {player_count} players.")
        self._emit_phase_change(room)
        extras = {}
        if mime is not None:
            extras["mr_meme"] = {"id": mime.id, "name": mime.name}
        return ActionResult.ok(room, privileged=True, **extras)

    # ------------------------------
    # Role reveal
    # ------------------------------
    @rejections_as_results
    def reveal_role(self, code: str, player_id: str) -> ActionResult:
        room = self.registry.require_room(code)
        require_status(room, [RoomStatus.ROLE_REVEAL], "Cannot reveal role now")
        player = room.get_player(player_id)
        if player is None:
            raise ActionRejected(RejectReason.PLAYER_NOT_FOUND, "Player not found")

        extras = self.reveal_handler.reveal(room, player)
        if extras["all_revealed"]:
            self._emit_phase_change(room)
        # Once play begins the room view goes back to hiding roles and words
        return ActionResult.ok(room, privileged=room.status == RoomStatus.ROLE_REVEAL, **extras)

    # ------------------------------
    # Elimination phases
    # ------------------------------
    @rejections_as_results
    def eliminate_player(self, code: str, player_id: str) -> ActionResult:
        room = self.registry.require_room(code)
        require_status(room, [RoomStatus.PLAYING], "Cannot eliminate now")
        player = require_alive_player(room, player_id)

        self.undo_manager.push(room)
        extras = self.elimination_handler.eliminate(room, player)
        return self._finish_action(room, extras)

    @rejections_as_results
    def skip_elimination(self, code: str) -> ActionResult:
        room = self.registry.require_room(code)
        require_status(room, [RoomStatus.PLAYING], "Cannot skip now")

        self.undo_manager.push(room)
        extras = self.elimination_handler.skip(room)
        return self._finish_action(room, extras)

    @rejections_as_results
    def revenger_revenge(self, code: str, target_id: str) -> ActionResult:
        room = self.registry.require_room(code)
        require_status(room, [RoomStatus.REVENGER_REVENGE], "No revenge is pending")
        revenger = room.get_player(room.special_role_state.pending_revenger_id)
        victim = require_alive_player(room, target_id)
        if revenger is None or victim is revenger:
            raise ActionRejected(RejectReason.INVALID_INPUT, "The Revenger cannot target themselves")

        self.undo_manager.push(room)
        extras = self.revenge_handler.take_revenge(room, revenger, victim)
        return self._finish_action(room, extras)

    @rejections_as_results
    def mr_white_guess(self, code: str, guess: str) -> ActionResult:
        room = self.registry.require_room(code)
        require_status(room, [RoomStatus.MR_WHITE_GUESS], "Cannot guess now")
        if not (guess or "").strip():
            raise ActionRejected(RejectReason.INVALID_INPUT, "Guess is required")
        mr_white = room.get_player(room.mr_white_guesser_id)
        if mr_white is None or room.word_pair is None:
            raise ActionRejected(RejectReason.PLAYER_NOT_FOUND, "Mr. White not found")

        self.undo_manager.push(room)
        extras = self.guess_handler.guess(room, mr_white, guess)
        return self._finish_action(room, extras)

    @rejections_as_results
    def undo(self, code: str) -> ActionResult:
        room = self.registry.require_room(code)
        if not self.undo_manager.pop(room):
            raise ActionRejected(RejectReason.NOTHING_TO_UNDO, "Nothing to undo")
        self.announce(f"Last action undone in room {room.code}.")
        self._emit_phase_change(room)
        return ActionResult.ok(room)

    def _finish_action(self, room: Room, extras: Dict[str, Any]) -> ActionResult:
        if self.event_emitter:
            if extras.get("eliminated"):
                self.event_emitter.emit_elimination(room.code, extras["eliminated"], extras.get("linked_eliminations"))
            if extras.get("game_over"):
                self.event_emitter.emit_game_over(room.code, extras["winners"], extras["win_reason"])
        self._emit_phase_change(room)
        return ActionResult.ok(room, **extras)

    def _emit_phase_change(self, room: Room) -> None:
        if self.event_emitter:
            self.event_emitter.emit_phase_change(room.code, room.status.value, room.round)

    # ------------------------------
    # Between games
    # ------------------------------
    @rejections_as_results
    def play_again(self, code: str, sid: str) -> ActionResult:
        """Back to the lobby with the same roster; scores and history are kept."""
        room = self.registry.require_room(code)
        require_host(room, sid, "Only host can start a new game")
        require_status(room, [RoomStatus.FINISHED], "The current game is not finished")

        room.status = RoomStatus.WAITING
        room.word_pair = None
        room.speaking_order = []
        room.round = 0
        room.mr_white_guesser_id = None
        room.special_role_state = SpecialRoleState()
        for player in room.players:
            player.reset_for_new_game()
        self.undo_manager.clear(room)

        self._emit_phase_change(room)
        return ActionResult.ok(room)

    @rejections_as_results
    def reset_scores(self, code: str, sid: str) -> ActionResult:
        room = self.registry.require_room(code)
        require_host(room, sid, "Only host can reset scores")

        self.scorer.reset_scores(room)
        self.undo_manager.clear(room)
        return ActionResult.ok(room)

    # ------------------------------
    # Views
    # ------------------------------
    def public_view(self, code: str, privileged: bool = False) -> Optional[Dict[str, Any]]:
        room = self.registry.get_room(code)
        if room is None:
            return None
        return public_room_view(room, privileged=privileged)

