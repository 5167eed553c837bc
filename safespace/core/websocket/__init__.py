"""
WebSocket layer for anonymous room chat.

Each socket gets a generated anonymous identity; messages are persisted and
fanned out to every connection joined to the same room.
"""

from safespace.core.websocket.manager import Connection, ConnectionRegistry
from safespace.core.websocket.relay import ChatRelay

__all__ = ["Connection", "ConnectionRegistry", "ChatRelay"]
