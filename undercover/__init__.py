"""
Undercover: host-device party game server.
"""

__version__ = "1.0.0"
