"""Observability: in-memory counters for the chat relay."""
from safespace.core.observability.metrics import RelayMetrics

__all__ = ["RelayMetrics"]
