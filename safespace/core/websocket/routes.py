"""
WebSocket route: /ws. Accept, register an anonymous connection, message loop, unregister.
"""
import logging

from fastapi import WebSocket

from safespace.core.config import settings
from safespace.core.websocket.handler import handle_message
from safespace.core.websocket.relay import ChatRelay

logger = logging.getLogger(__name__)


async def websocket_endpoint(websocket: WebSocket) -> None:
    """Accept the socket, give it an anonymous identity and relay its frames."""
    relay: ChatRelay = websocket.app.state.relay
    await websocket.accept()
    conn = relay.registry.register(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.debug("WebSocket closed by client connection_id=%s", conn.connection_id)
                break
            raw = message.get("text")
            if raw is None:
                raw = (message.get("bytes") or b"").decode("utf-8", errors="replace")
            await handle_message(relay, conn, raw, settings.max_frame_size)
    finally:
        relay.disconnect(conn.connection_id)
