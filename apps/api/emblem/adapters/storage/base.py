"""Object storage interfaces for binary art assets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class StorageError(Exception):
    """Raised when the object store cannot complete an operation."""


@dataclass(frozen=True, slots=True)
class StoredObject:
    key: str
    data: bytes
    content_type: str


class ObjectStore(ABC):
    """Bucket-style key/value store for asset bytes."""

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str) -> None:
        """Store ``data`` under ``key``, replacing any existing object."""

    @abstractmethod
    def get(self, key: str) -> StoredObject | None:
        """Return the object stored under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key``; returns whether an object was removed."""

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Public read URL for ``key``."""


__all__ = ["ObjectStore", "StorageError", "StoredObject"]
