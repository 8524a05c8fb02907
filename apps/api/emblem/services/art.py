"""Art service layer."""

from __future__ import annotations

import logging

from emblem.adapters.storage import ObjectStore, StorageError, StoredObject
from emblem.core.logging_safety import safe_log_identifier
from emblem.domain.geo import get_sector
from emblem.errors import ApiError, not_found
from emblem.repositories.memory import ArtRecord, CommentRecord, InMemoryStore, VoteRecord
from emblem.schemas.art import Art, Comment, Place, Vote

logger = logging.getLogger(__name__)


class ArtService:
    def __init__(self, store: InMemoryStore, object_store: ObjectStore) -> None:
        self._store = store
        self._objects = object_store

    def _to_art(self, record: ArtRecord) -> Art:
        return Art(
            id=record.id,
            type=record.type,
            owner_id=record.owner_id,
            upvotes=record.upvotes,
            downvotes=record.downvotes,
            url=self._objects.public_url(record.id),
            place_ids=list(record.place_ids),
            created_at=record.created_at,
        )

    @staticmethod
    def _to_comment(record: CommentRecord) -> Comment:
        return Comment(
            id=record.id,
            art_id=record.art_id,
            title=record.title,
            author_id=record.author_id,
            created_at=record.created_at,
        )

    @staticmethod
    def _to_vote(record: VoteRecord) -> Vote:
        return Vote(
            id=record.id,
            art_id=record.art_id,
            value=record.value,
            voter_id=record.voter_id,
            created_at=record.created_at,
        )

    def _require_art(self, art_id: str) -> ArtRecord:
        record = self._store.get_art(art_id)
        if record is None:
            raise not_found()
        return record

    def upload_art(self, *, owner_id: str, content_type: str | None, data: bytes) -> Art:
        """Create an art record and store its asset under the record id.

        The record is discarded again if the object store rejects the upload.
        """
        if not content_type:
            raise ApiError(status_code=400, code="VALIDATION_ERROR", message="Missing File-Type header")
        if not data:
            raise ApiError(status_code=400, code="VALIDATION_ERROR", message="Art payload is empty")

        record = self._store.create_art(owner_id=owner_id, art_type=content_type)
        try:
            self._objects.put(record.id, data, content_type)
        except StorageError as exc:
            self._store.delete_art(record.id)
            logger.error(
                "art.upload_failed art_id=%s owner_id=%s",
                record.id,
                safe_log_identifier(owner_id, prefix="pid"),
            )
            raise ApiError(
                status_code=502,
                code="STORAGE_UPLOAD_FAILED",
                message="Art asset could not be stored",
            ) from exc

        logger.info("art.uploaded art_id=%s type=%s size=%d", record.id, content_type, len(data))
        return self._to_art(record)

    def list_art(self) -> list[Art]:
        return [self._to_art(record) for record in self._store.list_arts()]

    def list_art_in_sector(self, sector: str) -> list[Art]:
        return [self._to_art(record) for record in self._store.list_arts_in_sector(sector)]

    def get_art(self, art_id: str) -> Art:
        return self._to_art(self._require_art(art_id))

    def download_art(self, art_id: str) -> StoredObject:
        record = self._require_art(art_id)
        stored = self._objects.get(record.id)
        if stored is None:
            raise not_found()
        return stored

    def delete_art(self, *, owner_id: str, art_id: str) -> None:
        record = self._store.get_art_for_owner(owner_id=owner_id, art_id=art_id)
        if record is None:
            raise not_found()

        try:
            self._objects.delete(record.id)
        except StorageError as exc:
            logger.error("art.delete_failed art_id=%s", record.id)
            raise ApiError(
                status_code=502,
                code="STORAGE_DELETE_FAILED",
                message="Art asset could not be deleted",
            ) from exc
        self._store.delete_art(record.id)
        logger.info("art.deleted art_id=%s", record.id)

    def place_art(self, *, art_id: str, lat: float, long: float) -> Art:
        """Attach art to the place for the coordinate's sector, creating it if new."""
        record = self._require_art(art_id)
        sector = get_sector(lat, long)
        place = self._store.find_place_by_sector(sector)
        if place is None:
            place = self._store.create_place(lat=lat, long=long, sector=sector)
        self._store.add_art_place(art=record, place=place)
        return self._to_art(record)

    def list_places(self, art_id: str) -> list[Place]:
        record = self._require_art(art_id)
        return [
            Place(id=place.id, lat=place.lat, long=place.long, sector=place.sector)
            for place in self._store.list_places_for_art(record)
        ]

    def add_comment(self, *, art_id: str, author_id: str, title: str) -> Comment:
        record = self._require_art(art_id)
        return self._to_comment(self._store.create_comment(art_id=record.id, author_id=author_id, title=title))

    def list_comments(self, art_id: str) -> list[Comment]:
        record = self._require_art(art_id)
        return [self._to_comment(comment) for comment in self._store.list_comments(record.id)]

    def cast_vote(self, *, art_id: str, voter_id: str, value: int) -> Vote:
        record = self._require_art(art_id)
        return self._to_vote(self._store.create_vote(art=record, voter_id=voter_id, value=value))

    def list_votes(self, art_id: str) -> list[Vote]:
        record = self._require_art(art_id)
        return [self._to_vote(vote) for vote in self._store.list_votes(record.id)]
