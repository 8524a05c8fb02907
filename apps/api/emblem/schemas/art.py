"""Art, place, comment and vote API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class Art(BaseModel):
    id: str
    type: str
    owner_id: str
    upvotes: int = 0
    downvotes: int = 0
    url: str
    place_ids: list[str] = Field(default_factory=list)
    created_at: datetime


class PlaceArtRequest(BaseModel):
    lat: float = Field(ge=-90, le=90)
    long: float = Field(ge=-180, le=180)


class Place(BaseModel):
    id: str
    lat: float
    long: float
    sector: str


class CreateCommentRequest(BaseModel):
    title: str = Field(min_length=1)


class Comment(BaseModel):
    id: str
    art_id: str
    title: str
    author_id: str
    created_at: datetime


class CastVoteRequest(BaseModel):
    vote: Literal[1, -1]


class Vote(BaseModel):
    id: str
    art_id: str
    value: int
    voter_id: str
    created_at: datetime
