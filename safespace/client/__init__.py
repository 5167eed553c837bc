"""Python client for the SafeSpace chat socket."""
from safespace.client.socket_manager import ChatSocketManager

__all__ = ["ChatSocketManager"]
