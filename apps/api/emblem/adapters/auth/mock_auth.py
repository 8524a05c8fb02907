"""Mock auth verifier for local development and tests."""

from emblem.adapters.auth.base import TokenVerifier
from emblem.auth.bearer import Accepted, Rejected, VerificationOutcome
from emblem.schemas.auth import AuthPrincipal


class MockTokenVerifier(TokenVerifier):
    """Accepts deterministic test tokens only.

    Expected token format:
    - ``test:<user_id>``
    - ``test:<user_id>:<role>``
    """

    def __init__(self, scope: tuple[str, ...] = ()) -> None:
        self._scope = scope

    async def verify(self, token: str) -> VerificationOutcome:
        parts = token.split(":")
        if len(parts) not in (2, 3) or parts[0] != "test":
            return Rejected("Invalid bearer token")

        user_id = parts[1].strip()
        role = parts[2].strip() if len(parts) == 3 else "artist"

        if not user_id:
            return Rejected("Bearer token missing user identity")
        if not role:
            return Rejected("Bearer token missing role")

        info = {"scope": list(self._scope)} if self._scope else None
        return Accepted(AuthPrincipal(user_id=user_id, role=role), info)


__all__ = ["MockTokenVerifier"]
