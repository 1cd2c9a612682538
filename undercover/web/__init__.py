"""
Web interface: Socket.IO host server and REST word routes.
"""

from .event_emitter import EventEmitter
from .game_server import GameServer

__all__ = ['EventEmitter', 'GameServer']
