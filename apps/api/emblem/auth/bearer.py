"""Bearer token authentication strategy."""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from emblem.auth.request import BearerRequest
from emblem.core.logging_safety import token_fingerprint

logger = logging.getLogger(__name__)

DEFAULT_REALM = "Users"
INVALID_TOKEN = "invalid_token"
TOKEN_FIELD = "access_token"

_BEARER_SCHEME = re.compile(r"^Bearer$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class VerifyError:
    """Verification could not be performed."""

    cause: BaseException


@dataclass(frozen=True, slots=True)
class Rejected:
    """Token was checked and refused.

    ``info`` is either a plain reason string or a mapping that may carry a
    ``message`` entry.
    """

    info: str | Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class Accepted:
    principal: Any
    info: Any = None


VerificationOutcome = VerifyError | Rejected | Accepted

Verify = Callable[..., VerificationOutcome | Awaitable[VerificationOutcome]]


@dataclass(frozen=True, slots=True)
class AuthSuccess:
    principal: Any
    info: Any = None


@dataclass(frozen=True, slots=True)
class AuthFailure:
    """Client-facing failure.

    Carries either a rendered challenge (401 with ``WWW-Authenticate``) or a
    bare status code for malformed credential placement.
    """

    challenge: str | None = None
    status: int | None = None


@dataclass(frozen=True, slots=True)
class AuthError:
    """Authentication system failure, never rendered as a challenge."""

    cause: BaseException


AuthResult = AuthSuccess | AuthFailure | AuthError


@runtime_checkable
class Authenticator(Protocol):
    """Pluggable authentication strategy consumed by the HTTP layer."""

    async def authenticate(self, request: BearerRequest) -> AuthResult: ...


def _normalize_scope(scope: str | Sequence[str] | None) -> tuple[str, ...]:
    if not scope:
        return ()
    if isinstance(scope, str):
        return (scope,)
    return tuple(scope)


@dataclass(frozen=True, slots=True)
class BearerOptions:
    realm: str = DEFAULT_REALM
    scope: tuple[str, ...] = ()
    pass_request_to_verify: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "realm", self.realm or DEFAULT_REALM)
        object.__setattr__(self, "scope", _normalize_scope(self.scope))


@dataclass(frozen=True, slots=True)
class Challenge:
    """``WWW-Authenticate`` descriptor for the Bearer scheme."""

    realm: str = DEFAULT_REALM
    scope: tuple[str, ...] = ()
    error: str | None = None
    error_description: str | None = None
    error_uri: str | None = None

    def render(self) -> str:
        challenge = f'Bearer realm="{self.realm}"'
        if self.scope:
            challenge += f', scope="{" ".join(self.scope)}"'
        if self.error:
            challenge += f', error="{self.error}"'
        if self.error_description:
            challenge += f', error_description="{self.error_description}"'
        if self.error_uri:
            challenge += f', error_uri="{self.error_uri}"'
        return challenge

    def __str__(self) -> str:
        return self.render()


class MalformedCredentials(Exception):
    """Credential placement in the request is ambiguous or unparseable."""


def extract_token(request: BearerRequest) -> str | None:
    """Return the bearer token carried by ``request``, if any.

    Raises:
        MalformedCredentials: the ``Authorization`` header is not exactly two
            space separated parts, or more than one location carries a token.
    """
    token: str | None = None

    authorization = request.headers.get("authorization") if request.headers else None
    if authorization:
        parts = authorization.split(" ")
        if len(parts) != 2:
            raise MalformedCredentials("Authorization header must have exactly two parts")
        scheme, credentials = parts
        if _BEARER_SCHEME.match(scheme):
            token = credentials

    body_token = request.body.get(TOKEN_FIELD) if request.body else None
    if body_token:
        if not isinstance(body_token, str):
            raise MalformedCredentials("access_token body field must be a string")
        if token:
            raise MalformedCredentials("Token supplied in more than one location")
        token = body_token

    query_token = request.query.get(TOKEN_FIELD) if request.query else None
    if query_token:
        if token:
            raise MalformedCredentials("Token supplied in more than one location")
        token = query_token

    return token or None


def _rejection_message(info: str | Mapping[str, Any] | None) -> str | None:
    if isinstance(info, str):
        return info
    if isinstance(info, Mapping):
        message = info.get("message")
        return str(message) if message else None
    return None


class BearerAuthenticator:
    """Authenticates requests carrying an OAuth 2.0 bearer token.

    The token is read from the ``Authorization`` header, the ``access_token``
    body field or the ``access_token`` query parameter, then handed to the
    ``verify`` callback. The callback returns (or resolves to) a
    ``VerificationOutcome``; raising is treated the same as ``VerifyError``.

    Args:
        options: A ``BearerOptions``, a mapping of its fields, or the verify
            callback itself when no configuration is needed.
        verify: ``verify(token)``, or ``verify(request, token)`` when
            ``pass_request_to_verify`` is enabled.
    """

    def __init__(
        self,
        options: BearerOptions | Mapping[str, Any] | Verify | None = None,
        verify: Verify | None = None,
    ) -> None:
        if callable(options) and verify is None:
            verify, options = options, None
        if verify is None or not callable(verify):
            raise TypeError("BearerAuthenticator requires a verify callback")

        if options is None:
            options = BearerOptions()
        elif isinstance(options, Mapping):
            options = BearerOptions(**options)
        elif not isinstance(options, BearerOptions):
            raise TypeError("options must be BearerOptions or a mapping")

        self._options = options
        self._verify = verify

    @property
    def options(self) -> BearerOptions:
        return self._options

    def challenge(
        self,
        error: str | None = None,
        description: str | None = None,
        uri: str | None = None,
    ) -> Challenge:
        return Challenge(
            realm=self._options.realm,
            scope=self._options.scope,
            error=error,
            error_description=description,
            error_uri=uri,
        )

    async def authenticate(self, request: BearerRequest) -> AuthResult:
        try:
            token = extract_token(request)
        except MalformedCredentials as exc:
            logger.debug("bearer.malformed reason=%s", exc)
            return AuthFailure(status=400)

        if token is None:
            return AuthFailure(challenge=self.challenge().render())

        try:
            if self._options.pass_request_to_verify:
                outcome = self._verify(request, token)
            else:
                outcome = self._verify(token)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as exc:
            return AuthError(exc)

        if isinstance(outcome, VerifyError):
            return AuthError(outcome.cause)
        if isinstance(outcome, Rejected):
            description = _rejection_message(outcome.info)
            logger.debug("bearer.rejected token=%s", token_fingerprint(token))
            return AuthFailure(challenge=self.challenge(INVALID_TOKEN, description).render())
        if isinstance(outcome, Accepted):
            return AuthSuccess(outcome.principal, outcome.info)

        return AuthError(TypeError(f"verify returned unsupported outcome {type(outcome).__name__}"))


__all__ = [
    "Accepted",
    "AuthError",
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "Authenticator",
    "BearerAuthenticator",
    "BearerOptions",
    "Challenge",
    "DEFAULT_REALM",
    "INVALID_TOKEN",
    "MalformedCredentials",
    "Rejected",
    "VerificationOutcome",
    "VerifyError",
    "extract_token",
]
