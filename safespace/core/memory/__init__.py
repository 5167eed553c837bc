"""
Record store: per-entity collections behind the Storage interface.
"""
from safespace.core.memory.storage import MemoryStorage, Storage, create_storage

__all__ = ["MemoryStorage", "Storage", "create_storage"]
