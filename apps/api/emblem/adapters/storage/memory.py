"""In-memory object store used for local development and tests."""

from __future__ import annotations

from emblem.adapters.storage.base import ObjectStore, StorageError, StoredObject


class InMemoryObjectStore(ObjectStore):
    """Keeps objects in a dict keyed by object key.

    Setting ``failure_message`` makes every write fail with ``StorageError``.
    """

    def __init__(self, public_base_url: str) -> None:
        self._public_base_url = public_base_url.rstrip("/")
        self.objects: dict[str, StoredObject] = {}
        self.failure_message: str | None = None

    def put(self, key: str, data: bytes, content_type: str) -> None:
        if self.failure_message is not None:
            raise StorageError(self.failure_message)
        self.objects[key] = StoredObject(key=key, data=bytes(data), content_type=content_type)

    def get(self, key: str) -> StoredObject | None:
        return self.objects.get(key)

    def delete(self, key: str) -> bool:
        if self.failure_message is not None:
            raise StorageError(self.failure_message)
        return self.objects.pop(key, None) is not None

    def public_url(self, key: str) -> str:
        return f"{self._public_base_url}/{key}"


__all__ = ["InMemoryObjectStore"]
