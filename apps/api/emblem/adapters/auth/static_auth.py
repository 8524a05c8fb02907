"""Verifier backed by a fixed token to user map."""

from __future__ import annotations

import secrets

from emblem.adapters.auth.base import TokenVerifier
from emblem.auth.bearer import Accepted, Rejected, VerificationOutcome
from emblem.schemas.auth import AuthPrincipal


def parse_token_map(raw: str) -> dict[str, str]:
    """Parse ``token:user_id`` pairs separated by commas.

    Entries without a colon or with an empty side are skipped.
    """
    token_map: dict[str, str] = {}
    for entry in raw.split(","):
        token, sep, user_id = entry.partition(":")
        token, user_id = token.strip(), user_id.strip()
        if not sep or not token or not user_id:
            continue
        token_map[token] = user_id
    return token_map


class StaticTokenVerifier(TokenVerifier):
    def __init__(self, token_map: dict[str, str], scope: tuple[str, ...] = ()) -> None:
        self._token_map = dict(token_map)
        self._scope = scope

    async def verify(self, token: str) -> VerificationOutcome:
        user_id: str | None = None
        # Compare against every entry so timing does not depend on the match position.
        for candidate, candidate_user in self._token_map.items():
            if secrets.compare_digest(candidate.encode(), token.encode()):
                user_id = candidate_user

        if user_id is None:
            return Rejected({"message": "Unknown bearer token"})

        info = {"scope": list(self._scope)} if self._scope else None
        return Accepted(AuthPrincipal(user_id=user_id), info)


__all__ = ["StaticTokenVerifier", "parse_token_map"]
