"""Token verification interfaces."""

from abc import ABC, abstractmethod

from emblem.auth.bearer import VerificationOutcome


class TokenVerifier(ABC):
    """Provider-neutral token verification interface.

    Implementations back the bearer strategy's verify callback and report
    ``Accepted``, ``Rejected`` or ``VerifyError``.
    """

    @abstractmethod
    async def verify(self, token: str) -> VerificationOutcome:
        """Verify token and return the outcome."""


__all__ = ["TokenVerifier"]
