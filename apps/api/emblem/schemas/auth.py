"""Authentication schemas."""

from pydantic import BaseModel, Field


class AuthPrincipal(BaseModel):
    """Authenticated user resolved by a token verifier."""

    user_id: str = Field(min_length=1)
    role: str = Field(default="artist", min_length=1)
