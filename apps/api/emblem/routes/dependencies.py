"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from emblem.adapters.auth import MockTokenVerifier, StaticTokenVerifier, TokenVerifier, parse_token_map
from emblem.adapters.storage import ObjectStore
from emblem.auth import (
    AuthError,
    AuthFailure,
    BearerAuthenticator,
    BearerOptions,
    read_request,
)
from emblem.core.config import Settings, get_settings
from emblem.core.logging_safety import safe_log_identifier
from emblem.errors import ApiError
from emblem.repositories.memory import InMemoryStore
from emblem.schemas.auth import AuthPrincipal
from emblem.services.art import ArtService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_token_verifier(settings: Annotated[Settings, Depends(get_settings)]) -> TokenVerifier:
    """Resolve provider adapter from configuration."""
    if settings.auth_provider == "mock":
        return MockTokenVerifier(scope=settings.scopes)
    return StaticTokenVerifier(parse_token_map(settings.auth_tokens), scope=settings.scopes)


def get_authenticator(
    settings: Annotated[Settings, Depends(get_settings)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> BearerAuthenticator:
    options = BearerOptions(realm=settings.auth_realm, scope=settings.scopes)
    return BearerAuthenticator(options, verifier.verify)


async def get_authenticated_principal(
    request: Request,
    authenticator: Annotated[BearerAuthenticator, Depends(get_authenticator)],
    _credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
) -> AuthPrincipal:
    """Run the bearer strategy and attach the principal to request context."""
    correlation_id = _request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")

    result = await authenticator.authenticate(await read_request(request))

    if isinstance(result, AuthFailure):
        if result.challenge is None:
            logger.warning(
                "auth.rejected correlation_id=%s method=%s path=%s reason=malformed_credentials",
                safe_correlation_id,
                request.method,
                request.url.path,
            )
            raise ApiError(
                status_code=result.status or 400,
                code="BAD_REQUEST",
                message="Malformed or ambiguous bearer credentials",
            )
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=challenge",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise ApiError(
            status_code=401,
            code="UNAUTHORIZED",
            message="Invalid or missing bearer token",
            headers={"WWW-Authenticate": result.challenge},
        )

    if isinstance(result, AuthError):
        logger.error(
            "auth.error correlation_id=%s method=%s path=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            exc_info=result.cause,
        )
        raise ApiError(
            status_code=500,
            code="AUTHENTICATION_ERROR",
            message="Authentication could not be completed",
        ) from result.cause

    principal = result.principal
    safe_principal_id = safe_log_identifier(principal.user_id, prefix="pid")
    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_principal_id,
        principal.role,
    )
    request.state.auth_principal = principal
    request.state.auth_info = result.info
    return principal


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_object_store(request: Request) -> ObjectStore:
    return request.app.state.object_store


def get_art_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    object_store: Annotated[ObjectStore, Depends(get_object_store)],
) -> ArtService:
    return ArtService(store, object_store)
