"""
Simple in-memory counters for the chat relay: frames in/dropped, relayed messages, deliveries.
"""
import logging
from typing import Dict

logger = logging.getLogger("safespace.relay.metrics")


class RelayMetrics:
    """In-memory counters for WebSocket traffic. Reset on restart."""

    def __init__(self) -> None:
        self._frames_received = 0
        self._frames_dropped = 0
        self._joins = 0
        self._messages_relayed = 0
        self._deliveries = 0
        self._failed_deliveries = 0

    def record_frame(self) -> None:
        self._frames_received += 1

    def record_dropped(self, reason: str) -> None:
        self._frames_dropped += 1
        logger.debug("Frame dropped: %s", reason)

    def record_join(self) -> None:
        self._joins += 1

    def record_relay(self, delivered: int, failed: int) -> None:
        self._messages_relayed += 1
        self._deliveries += delivered
        self._failed_deliveries += failed

    def snapshot(self) -> Dict[str, int]:
        return {
            "frames_received": self._frames_received,
            "frames_dropped": self._frames_dropped,
            "joins": self._joins,
            "messages_relayed": self._messages_relayed,
            "deliveries": self._deliveries,
            "failed_deliveries": self._failed_deliveries,
        }
