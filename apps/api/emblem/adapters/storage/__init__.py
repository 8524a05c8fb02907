"""Object storage adapters."""

from .base import ObjectStore, StorageError, StoredObject
from .memory import InMemoryObjectStore

__all__ = ["InMemoryObjectStore", "ObjectStore", "StorageError", "StoredObject"]
