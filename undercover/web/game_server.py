"""
Socket.IO server the host device talks to.
"""

import random
import traceback
from typing import Optional, Dict, Any, Callable

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_socketio import SocketIO, join_room, close_room

from .event_emitter import EventEmitter
from .word_routes import create_words_blueprint
from ..config.game_config import GameConfig, default_config
from ..core import IdGenerator, RoomRegistry, ActionResult, public_room_view
from ..core.game_engine import GameEngine
from ..words.catalog import WordCatalog, load_default_pairs


class GameServer:
    """Web server exposing one Socket.IO event per game operation."""

    def __init__(self, config: GameConfig = default_config, catalog: Optional[WordCatalog] = None,
                 event_emitter: Optional[EventEmitter] = None):
        self.config = config
        rng = random.Random(config.random_seed)

        if catalog is None:
            defaults = load_default_pairs(config.default_words_path) if config.default_words_path else None
            catalog = WordCatalog(defaults=defaults, custom_path=config.custom_words_path)
        self.catalog = catalog
        self.event_emitter = event_emitter or EventEmitter()
        self.registry = RoomRegistry(config, IdGenerator(config, rng), self.catalog)
        self.engine = GameEngine(self.registry, self.catalog, config, rng, self.event_emitter)

        self.app = Flask(__name__)
        CORS(self.app, resources={r"/api/*": {"origins": config.cors_allowed_origins}})
        self.socketio = SocketIO(self.app, cors_allowed_origins=config.cors_allowed_origins, async_mode='threading')

        # Register event emitter listener
        self.event_emitter.register_listener(self._broadcast_event)

        # Setup routes
        self._setup_routes()

        # Setup socketio handlers
        self._setup_socketio()

    def _setup_routes(self):
        """Setup Flask routes."""
        @self.app.route('/health')
        def health():
            return jsonify({"status": "ok", "rooms": self.registry.room_count()})

        self.app.register_blueprint(create_words_blueprint(self.catalog), url_prefix='/api')

    def _setup_socketio(self):
        """Setup SocketIO event handlers. Every handler acks with a result payload."""
        registry = self.registry
        engine = self.engine

        def create_room(data):
            result = registry.create_room(request.sid, data.get("player_name"))
            if result.success:
                join_room(result.room.code)
                print(f"Room {result.room.code} created by {result.room.get_host().name}")
            payload = self._respond(result)
            if result.success:
                payload["room_code"] = result.room.code
            return payload

        def watch_room(data):
            view = engine.public_view(data.get("room_code"))
            if view is None:
                return {"success": False, "error": "Room not found", "reason": "room_not_found"}
            join_room(view["code"])
            return {"success": True, "room": view}

        self._on('CREATE_ROOM', create_room)
        self._on('WATCH_ROOM', watch_room)
        self._on('ADD_PLAYER', lambda data: self._respond(
            registry.add_player(data.get("room_code"), request.sid, data.get("player_name"))))
        self._on('REMOVE_PLAYER', lambda data: self._respond(
            registry.remove_player(data.get("room_code"), request.sid, data.get("player_id"))))
        self._on('UPDATE_SETTINGS', lambda data: self._respond(
            engine.update_settings(data.get("room_code"), request.sid, data.get("settings") or {})))
        self._on('START_GAME', lambda data: self._respond(
            engine.start_game(data.get("room_code"), request.sid)))
        self._on('REVEAL_ROLE', lambda data: self._respond(
            engine.reveal_role(data.get("room_code"), data.get("player_id"))))
        self._on('ELIMINATE_PLAYER', lambda data: self._respond(
            engine.eliminate_player(data.get("room_code"), data.get("player_id"))))
        self._on('SKIP_ELIMINATION', lambda data: self._respond(
            engine.skip_elimination(data.get("room_code"))))
        self._on('REVENGER_REVENGE', lambda data: self._respond(
            engine.revenger_revenge(data.get("room_code"), data.get("target_id"))))
        self._on('MR_WHITE_GUESS', lambda data: self._respond(
            engine.mr_white_guess(data.get("room_code"), data.get("guess"))))
        self._on('UNDO_ACTION', lambda data: self._respond(
            engine.undo(data.get("room_code"))))
        self._on('PLAY_AGAIN', lambda data: self._respond(
            engine.play_again(data.get("room_code"), request.sid)))
        self._on('RESET_SCORES', lambda data: self._respond(
            engine.reset_scores(data.get("room_code"), request.sid)))

        @self.socketio.on('connect')
        def handle_connect():
            print(f"Host connected: {request.sid}")

        @self.socketio.on('disconnect')
        def handle_disconnect(reason=None):
            print(f"Host disconnected: {request.sid}")
            for code in registry.leave(request.sid):
                self.socketio.emit('room_closed', {'room_code': code}, to=code)
                close_room(code)
                print(f"Room {code} deleted")

    def _on(self, event: str, handler: Callable[[Dict[str, Any]], Dict[str, Any]]) -> None:
        """Register a handler; unexpected errors become a failed ack instead of a dropped request."""
        def wrapper(data=None):
            try:
                return handler(data or {})
            except Exception as e:
                print(f"Error handling {event}: {e}")
                traceback.print_exc()
                return {"success": False, "error": f"Failed to process {event}"}

        self.socketio.on_event(event, wrapper)

    def _respond(self, result: ActionResult) -> Dict[str, Any]:
        """Ack payload for the host; watchers get the redacted view."""
        payload = result.to_dict()
        if result.success and result.room is not None:
            payload["room"] = public_room_view(result.room, privileged=result.privileged)
            self.socketio.emit('room_update', {'room': public_room_view(result.room)}, to=result.room.code)
        return payload

    def _broadcast_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Forward an engine event to everyone watching the room."""
        room_code = data.get("room_code")
        if room_code:
            self.socketio.emit(event_type, data, to=room_code)

    def start(self) -> None:
        """Start the web server."""
        print(f"\n{'='*60}")
        print(f"Starting Undercover server on http://{self.config.host}:{self.config.port}")
        print(f"{'='*60}\n")
        self.socketio.run(self.app, host=self.config.host, port=self.config.port, debug=False,
                          allow_unsafe_werkzeug=True)
