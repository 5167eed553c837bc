"""
Connection registry: connection_id -> (anonymous user_id, websocket, current room).

Room membership is kept in a separate index so a broadcast only touches the
connections in that room. All access happens on the event loop thread.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """One live socket and the anonymous identity generated for it."""
    connection_id: str
    user_id: str
    websocket: Any
    room_id: Optional[str] = None


class ConnectionRegistry:
    """Owned table of live connections plus a room -> members index."""

    def __init__(self) -> None:
        self._connections: Dict[str, Connection] = {}
        # room_id -> {connection_id: None}; dict keeps join order
        self._rooms: Dict[str, Dict[str, None]] = {}

    def register(self, websocket: Any) -> Connection:
        """Register a socket under a fresh connection id and anonymous user id."""
        conn = Connection(
            connection_id=str(uuid.uuid4()),
            user_id=str(uuid.uuid4()),
            websocket=websocket,
        )
        self._connections[conn.connection_id] = conn
        logger.info("WebSocket registered connection_id=%s", conn.connection_id)
        return conn

    def unregister(self, connection_id: str) -> Optional[Connection]:
        """Drop the connection and its room membership. Peers are not notified."""
        conn = self._connections.pop(connection_id, None)
        if conn is None:
            return None
        self._leave_room(conn)
        logger.info("WebSocket unregistered connection_id=%s", connection_id)
        return conn

    def get(self, connection_id: str) -> Optional[Connection]:
        return self._connections.get(connection_id)

    def join(self, connection_id: str, room_id: str) -> Optional[Connection]:
        """Move the connection into room_id, leaving any previous room."""
        conn = self._connections.get(connection_id)
        if conn is None:
            return None
        if conn.room_id == room_id:
            return conn
        self._leave_room(conn)
        conn.room_id = room_id
        self._rooms.setdefault(room_id, {})[connection_id] = None
        logger.debug("connection_id=%s joined room_id=%s", connection_id, room_id)
        return conn

    def members(self, room_id: str) -> List[Connection]:
        """Snapshot of connections currently in room_id, in join order."""
        ids = self._rooms.get(room_id)
        if not ids:
            return []
        return [self._connections[cid] for cid in list(ids)]

    def room_ids(self) -> List[str]:
        return list(self._rooms.keys())

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._connections

    def _leave_room(self, conn: Connection) -> None:
        if conn.room_id is None:
            return
        members = self._rooms.get(conn.room_id)
        if members is not None:
            members.pop(conn.connection_id, None)
            if not members:
                del self._rooms[conn.room_id]
        conn.room_id = None
