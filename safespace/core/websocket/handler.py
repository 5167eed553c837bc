"""
WebSocket frame handling: decode, validate shape, dispatch join-room / send-message.

Bad frames are logged and dropped. No error frame is sent and the connection stays open.
"""
import json
import logging
from typing import Any, Dict, Optional

from safespace.core.websocket.manager import Connection
from safespace.core.websocket.relay import ChatRelay

logger = logging.getLogger(__name__)

# Max JSON frame size (bytes)
MAX_FRAME_SIZE = 64 * 1024

JOIN_ROOM = "join-room"
SEND_MESSAGE = "send-message"


def decode_frame(raw: str, max_size: int = MAX_FRAME_SIZE) -> Optional[Dict[str, Any]]:
    """Parse a text frame into a dict, or return None if it is unusable."""
    size = len(raw.encode("utf-8", errors="replace"))
    if size > max_size:
        logger.warning("Frame too large (%d bytes), dropped", size)
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON frame dropped: %s", e)
        return None
    if not isinstance(data, dict):
        logger.warning("Frame is not a JSON object, dropped")
        return None
    return data


def _room_id(data: Dict[str, Any]) -> Optional[str]:
    room_id = data.get("roomId")
    if isinstance(room_id, str) and room_id.strip():
        return room_id
    return None


async def handle_message(
    relay: ChatRelay,
    conn: Connection,
    raw: str,
    max_size: int = MAX_FRAME_SIZE,
) -> None:
    """Dispatch one incoming text frame."""
    relay.metrics.record_frame()
    data = decode_frame(raw, max_size)
    if data is None:
        relay.metrics.record_dropped("undecodable frame")
        return

    msg_type = data.get("type") or ""
    try:
        if msg_type == JOIN_ROOM:
            room_id = _room_id(data)
            if room_id is None:
                logger.warning("join-room without roomId from connection_id=%s", conn.connection_id)
                relay.metrics.record_dropped("missing roomId")
                return
            await relay.join(conn.connection_id, room_id)
            return
        if msg_type == SEND_MESSAGE:
            room_id = _room_id(data)
            if room_id is None:
                logger.warning("send-message without roomId from connection_id=%s", conn.connection_id)
                relay.metrics.record_dropped("missing roomId")
                return
            await relay.send(conn.connection_id, room_id, data.get("content"))
            return
    except Exception as e:
        logger.error("WebSocket message error for connection_id=%s: %s", conn.connection_id, e, exc_info=True)
        relay.metrics.record_dropped("handler error")
        return

    logger.warning("Unknown frame type %r from connection_id=%s, dropped", msg_type, conn.connection_id)
    relay.metrics.record_dropped("unknown type")
