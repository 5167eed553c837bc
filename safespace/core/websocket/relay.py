"""
Chat relay: history replay on join, persist-then-broadcast on send.
"""
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from safespace.core.memory.schemas import ChatMessage, InsertChatMessage
from safespace.core.memory.storage import Storage
from safespace.core.observability.metrics import RelayMetrics
from safespace.core.websocket.manager import Connection, ConnectionRegistry

logger = logging.getLogger(__name__)

RECENT_MESSAGES_LIMIT = 20


class ChatRelay:
    """Fans chat messages out to the connections joined to the same room."""

    def __init__(
        self,
        storage: Storage,
        registry: ConnectionRegistry,
        metrics: Optional[RelayMetrics] = None,
        recent_limit: int = RECENT_MESSAGES_LIMIT,
    ) -> None:
        self.storage = storage
        self.registry = registry
        self.metrics = metrics or RelayMetrics()
        self.recent_limit = recent_limit

    async def join(self, connection_id: str, room_id: str) -> bool:
        """
        Put the connection in room_id and send it the room's recent history.

        Returns False if the connection is no longer registered.
        """
        conn = self.registry.join(connection_id, room_id)
        if conn is None:
            logger.warning("Join from unknown connection_id=%s dropped", connection_id)
            return False
        self.metrics.record_join()
        recent = self.storage.get_recent_chat_messages(room_id, self.recent_limit)
        await self._deliver(conn, {
            "type": "recent-messages",
            "messages": [m.model_dump(mode="json") for m in recent],
        })
        return True

    async def send(self, connection_id: str, room_id: str, content: Any) -> Optional[ChatMessage]:
        """
        Persist a message from connection_id and broadcast it to room_id.

        Invalid content is logged and dropped; the sender gets no error frame.
        The sender does not need to be a member of room_id.
        """
        conn = self.registry.get(connection_id)
        if conn is None:
            logger.warning("Message from unknown connection_id=%s dropped", connection_id)
            self.metrics.record_dropped("unknown connection")
            return None
        try:
            data = InsertChatMessage(roomId=room_id, content=content, authorId=conn.user_id)
        except ValidationError as e:
            logger.warning(
                "Invalid chat message from connection_id=%s dropped: %s",
                connection_id,
                e.errors(include_url=False),
            )
            self.metrics.record_dropped("invalid message")
            return None

        message = self.storage.create_chat_message(data)
        frame = {"type": "new-message", "message": message.model_dump(mode="json")}
        delivered = failed = 0
        for peer in self.registry.members(room_id):
            if await self._deliver(peer, frame):
                delivered += 1
            else:
                failed += 1
        self.metrics.record_relay(delivered, failed)
        logger.debug(
            "Relayed message %s to room_id=%s (delivered=%d failed=%d)",
            message.id, room_id, delivered, failed,
        )
        return message

    def disconnect(self, connection_id: str) -> None:
        self.registry.unregister(connection_id)

    async def _deliver(self, conn: Connection, frame: Dict[str, Any]) -> bool:
        """Send one frame; a failed send unregisters the connection."""
        try:
            await conn.websocket.send_json(frame)
            return True
        except Exception as e:
            logger.warning("Send to connection_id=%s failed: %s", conn.connection_id, e)
            self.registry.unregister(conn.connection_id)
            return False
