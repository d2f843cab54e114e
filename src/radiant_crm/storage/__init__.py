from .json_file_storage import JsonFileStorage
from .memory_storage import InMemoryStorage
from .persisted_store import PersistedStore
from .port import KeyValueStorage

__all__ = ["JsonFileStorage", "InMemoryStorage", "KeyValueStorage", "PersistedStore"]
