"""
Event emitter that forwards game events to registered listeners.
"""

from typing import Any, Callable, Dict, List, Optional
from threading import Lock


Listener = Callable[[str, Dict[str, Any]], None]


class EventEmitter:
    """Fan-out of game events; the web server registers itself as a listener."""

    def __init__(self):
        self._listeners: List[Listener] = []
        self._lock = Lock()

    def register_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event to every listener."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event_type, data)
            except Exception as e:
                # Don't let a broken listener break the game
                print(f"Error delivering event {event_type}: {e}")

    def emit_phase_change(self, room_code: str, status: str, round_number: int) -> None:
        """Emit phase change event."""
        self._emit("phase_change", {
            "room_code": room_code,
            "status": status,
            "round": round_number,
        })

    def emit_elimination(self, room_code: str, eliminated: Dict[str, Any],
                         linked: Optional[List[Dict[str, Any]]] = None) -> None:
        """Emit player elimination event."""
        self._emit("elimination", {
            "room_code": room_code,
            "eliminated": eliminated,
            "linked_eliminations": linked or [],
        })

    def emit_game_over(self, room_code: str, winners: List[str], reason: str) -> None:
        """Emit game over event."""
        self._emit("game_over", {
            "room_code": room_code,
            "winners": winners,
            "reason": reason,
        })
