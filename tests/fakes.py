"""Socket stand-ins for relay and client manager tests."""
import asyncio
import json

from websockets.protocol import State


class FakeWebSocket:
    """Server-side socket recording the frames the relay sends it."""

    def __init__(self, fail: bool = False) -> None:
        self.frames = []
        self.fail = fail

    async def send_json(self, data) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.frames.append(data)


class FakeClientSocket:
    """Client-side socket for ChatSocketManager; frames are pushed by the test."""

    def __init__(self) -> None:
        self.state = State.OPEN
        self.sent = []
        self._incoming: asyncio.Queue = asyncio.Queue()

    def push(self, frame) -> None:
        self._incoming.put_nowait(frame if isinstance(frame, str) else json.dumps(frame))

    def server_close(self) -> None:
        self.state = State.CLOSED
        self._incoming.put_nowait(None)

    async def send(self, data: str) -> None:
        self.sent.append(json.loads(data))

    async def close(self) -> None:
        if self.state is State.OPEN:
            self.server_close()

    def __aiter__(self):
        return self

    async def __anext__(self):
        item = await self._incoming.get()
        if item is None:
            raise StopAsyncIteration
        return item
