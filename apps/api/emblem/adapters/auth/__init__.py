"""Auth verifier adapters."""

from .base import TokenVerifier
from .mock_auth import MockTokenVerifier
from .static_auth import StaticTokenVerifier, parse_token_map

__all__ = [
    "TokenVerifier",
    "MockTokenVerifier",
    "StaticTokenVerifier",
    "parse_token_map",
]
