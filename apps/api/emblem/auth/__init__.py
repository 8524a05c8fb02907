"""Bearer token authentication."""

from .bearer import (
    Accepted,
    AuthError,
    AuthFailure,
    AuthResult,
    AuthSuccess,
    Authenticator,
    BearerAuthenticator,
    BearerOptions,
    Challenge,
    Rejected,
    VerificationOutcome,
    VerifyError,
)
from .request import BearerRequest, InboundRequest, read_request

__all__ = [
    "Accepted",
    "AuthError",
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "Authenticator",
    "BearerAuthenticator",
    "BearerOptions",
    "BearerRequest",
    "Challenge",
    "InboundRequest",
    "Rejected",
    "VerificationOutcome",
    "VerifyError",
    "read_request",
]
