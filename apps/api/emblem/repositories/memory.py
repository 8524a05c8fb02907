"""In-memory repositories used by the API scaffold and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4


@dataclass(slots=True)
class ArtRecord:
    id: str
    type: str
    owner_id: str
    created_at: datetime
    upvotes: int = 0
    downvotes: int = 0
    place_ids: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PlaceRecord:
    id: str
    lat: float
    long: float
    sector: str


@dataclass(slots=True)
class CommentRecord:
    id: str
    art_id: str
    title: str
    author_id: str
    created_at: datetime


@dataclass(slots=True)
class VoteRecord:
    id: str
    art_id: str
    value: int
    voter_id: str
    created_at: datetime


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer for scaffolding and tests."""

    arts: dict[str, ArtRecord] = field(default_factory=dict)
    places: dict[str, PlaceRecord] = field(default_factory=dict)
    comments: dict[str, CommentRecord] = field(default_factory=dict)
    votes: dict[str, VoteRecord] = field(default_factory=dict)
    art_write_count: int = 0
    place_write_count: int = 0
    comment_write_count: int = 0
    vote_write_count: int = 0

    def create_art(self, owner_id: str, art_type: str) -> ArtRecord:
        art = ArtRecord(
            id=str(uuid4()),
            type=art_type,
            owner_id=owner_id,
            created_at=datetime.now(UTC),
        )
        self.arts[art.id] = art
        self.art_write_count += 1
        return art

    def get_art(self, art_id: str) -> ArtRecord | None:
        return self.arts.get(art_id)

    def get_art_for_owner(self, owner_id: str, art_id: str) -> ArtRecord | None:
        art = self.arts.get(art_id)
        if art is None or art.owner_id != owner_id:
            return None
        return art

    def list_arts(self) -> list[ArtRecord]:
        return sorted(self.arts.values(), key=lambda record: record.created_at)

    def list_arts_in_sector(self, sector: str) -> list[ArtRecord]:
        place_ids = {place.id for place in self.places.values() if place.sector == sector}
        return [art for art in self.list_arts() if place_ids.intersection(art.place_ids)]

    def delete_art(self, art_id: str) -> ArtRecord | None:
        """Remove an art record together with its comments and votes."""
        art = self.arts.pop(art_id, None)
        if art is None:
            return None
        self.comments = {key: value for key, value in self.comments.items() if value.art_id != art_id}
        self.votes = {key: value for key, value in self.votes.items() if value.art_id != art_id}
        self.art_write_count += 1
        return art

    def find_place_by_sector(self, sector: str) -> PlaceRecord | None:
        for place in self.places.values():
            if place.sector == sector:
                return place
        return None

    def list_places_for_art(self, art: ArtRecord) -> list[PlaceRecord]:
        return [self.places[place_id] for place_id in art.place_ids if place_id in self.places]

    def create_place(self, *, lat: float, long: float, sector: str) -> PlaceRecord:
        place = PlaceRecord(id=str(uuid4()), lat=lat, long=long, sector=sector)
        self.places[place.id] = place
        self.place_write_count += 1
        return place

    def add_art_place(self, *, art: ArtRecord, place: PlaceRecord) -> None:
        if place.id in art.place_ids:
            return
        art.place_ids.append(place.id)
        self.art_write_count += 1

    def create_comment(self, *, art_id: str, author_id: str, title: str) -> CommentRecord:
        comment = CommentRecord(
            id=str(uuid4()),
            art_id=art_id,
            title=title,
            author_id=author_id,
            created_at=datetime.now(UTC),
        )
        self.comments[comment.id] = comment
        self.comment_write_count += 1
        return comment

    def list_comments(self, art_id: str) -> list[CommentRecord]:
        comments = [record for record in self.comments.values() if record.art_id == art_id]
        comments.sort(key=lambda record: record.created_at)
        return comments

    def create_vote(self, *, art: ArtRecord, voter_id: str, value: int) -> VoteRecord:
        vote = VoteRecord(
            id=str(uuid4()),
            art_id=art.id,
            value=value,
            voter_id=voter_id,
            created_at=datetime.now(UTC),
        )
        self.votes[vote.id] = vote
        if value > 0:
            art.upvotes += 1
        elif value < 0:
            art.downvotes += 1
        self.vote_write_count += 1
        return vote

    def list_votes(self, art_id: str) -> list[VoteRecord]:
        votes = [record for record in self.votes.values() if record.art_id == art_id]
        votes.sort(key=lambda record: record.created_at)
        return votes
