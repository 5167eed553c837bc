"""
Client-side chat socket: reconnect with linear backoff and fan incoming frames out to handlers.

Usage:
    manager = ChatSocketManager("ws://localhost:8000/ws")
    manager.add_message_handler(print)
    await manager.connect()
    await manager.join_room(room_id)
    await manager.send_message(room_id, "hello")
"""
import asyncio
import inspect
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from websockets.asyncio.client import connect as ws_connect
from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.protocol import State

from safespace.core.config import settings

logger = logging.getLogger(__name__)

MessageHandler = Callable[[Dict[str, Any]], Union[None, Awaitable[None]]]


class ChatSocketManager:
    """Owns one chat socket; reconnects after unexpected closes, up to a fixed attempt count."""

    def __init__(
        self,
        url: Optional[str] = None,
        max_reconnect_attempts: Optional[int] = None,
        reconnect_interval: Optional[float] = None,
        connect: Callable[[str], Any] = ws_connect,
    ) -> None:
        self.url = url or settings.client_ws_url
        self.max_reconnect_attempts = (
            settings.client_max_reconnect_attempts
            if max_reconnect_attempts is None
            else max_reconnect_attempts
        )
        self.reconnect_interval = (
            settings.client_reconnect_interval
            if reconnect_interval is None
            else reconnect_interval
        )
        self._connect = connect
        self._ws: Any = None
        self._reader: Optional[asyncio.Task] = None
        self._reconnect_task: Optional[asyncio.Task] = None
        self._closing = False
        self.reconnect_attempts = 0
        # dict as an insertion-ordered set
        self._handlers: Dict[MessageHandler, None] = {}

    async def connect(self) -> Any:
        """Open the socket and start reading. Raises if the connection fails."""
        self._closing = False
        ws = await self._connect(self.url)
        self._ws = ws
        self.reconnect_attempts = 0
        logger.info("WebSocket connected to %s", self.url)
        self._reader = asyncio.create_task(self._read_loop(ws))
        return ws

    async def _read_loop(self, ws: Any) -> None:
        try:
            async for raw in ws:
                try:
                    data = json.loads(raw)
                except (json.JSONDecodeError, TypeError) as e:
                    logger.error("Error parsing WebSocket message: %s", e)
                    continue
                await self._dispatch(data)
        except ConnectionClosed as e:
            logger.debug("WebSocket closed: %s", e)
        logger.info("WebSocket disconnected")
        if self._ws is ws:
            self._ws = None
        if not self._closing:
            self._reconnect_task = asyncio.create_task(self._attempt_reconnect())

    async def _dispatch(self, data: Any) -> None:
        for handler in list(self._handlers):
            try:
                result = handler(data)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error("Message handler %r failed: %s", handler, e, exc_info=True)

    async def _attempt_reconnect(self) -> None:
        """Linear backoff: wait interval * attempt before each try, stop after the cap."""
        while not self._closing and self.reconnect_attempts < self.max_reconnect_attempts:
            self.reconnect_attempts += 1
            logger.info(
                "Attempting to reconnect... (%d/%d)",
                self.reconnect_attempts,
                self.max_reconnect_attempts,
            )
            await asyncio.sleep(self.reconnect_interval * self.reconnect_attempts)
            if self._closing:
                return
            try:
                await self.connect()
                return
            except (OSError, WebSocketException, asyncio.TimeoutError) as e:
                logger.warning("Reconnect attempt %d failed: %s", self.reconnect_attempts, e)
        if not self._closing:
            logger.error("Giving up after %d reconnect attempts", self.reconnect_attempts)

    def add_message_handler(self, handler: MessageHandler) -> None:
        self._handlers[handler] = None

    def remove_message_handler(self, handler: MessageHandler) -> None:
        self._handlers.pop(handler, None)

    def is_connected(self) -> bool:
        return self._ws is not None and self._ws.state is State.OPEN

    async def _send(self, frame: Dict[str, Any]) -> bool:
        if not self.is_connected():
            return False
        await self._ws.send(json.dumps(frame))
        return True

    async def join_room(self, room_id: str) -> bool:
        """Send join-room if connected. Returns whether the frame was sent."""
        return await self._send({"type": "join-room", "roomId": room_id})

    async def send_message(self, room_id: str, content: str) -> bool:
        """Send send-message if connected. Returns whether the frame was sent."""
        return await self._send({"type": "send-message", "roomId": room_id, "content": content})

    async def disconnect(self) -> None:
        """Close the socket for good; no reconnect follows."""
        self._closing = True
        if self._reconnect_task is not None and self._reconnect_task is not asyncio.current_task():
            self._reconnect_task.cancel()
        ws, self._ws = self._ws, None
        if ws is not None:
            await ws.close()
        if self._reader is not None and self._reader is not asyncio.current_task():
            try:
                await self._reader
            except asyncio.CancelledError:
                pass
        self._reader = None
