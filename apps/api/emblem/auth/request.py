"""Inbound request view consumed by the bearer strategy."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from fastapi import Request

logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class BearerRequest(Protocol):
    """Request surface needed to locate a bearer credential.

    ``headers`` uses lowercase keys. ``body`` is ``None`` when the request
    has no parsed body.
    """

    headers: Mapping[str, str]
    body: Mapping[str, Any] | None
    query: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class InboundRequest:
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Mapping[str, Any] | None = None
    query: Mapping[str, str] = field(default_factory=dict)
    raw: Any = None

    @classmethod
    def build(
        cls,
        *,
        headers: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
        query: Mapping[str, str] | None = None,
        raw: Any = None,
    ) -> InboundRequest:
        return cls(
            headers={key.lower(): value for key, value in (headers or {}).items()},
            body=body,
            query=dict(query or {}),
            raw=raw,
        )


async def _parse_body(request: Request) -> Mapping[str, Any] | None:
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        raw_body = await request.body()
        if not raw_body:
            return None
        try:
            payload = json.loads(raw_body)
        except ValueError:
            logger.debug("request.body_unparseable content_type=%s", content_type)
            return None
        return payload if isinstance(payload, dict) else None

    if content_type in _FORM_CONTENT_TYPES:
        # Cache the raw bytes first so routes can still call request.body().
        await request.body()
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    return None


async def read_request(request: Request) -> InboundRequest:
    """Snapshot headers, query parameters and any parsed body of ``request``.

    Binary and other non-form payloads are left unread so routes can consume
    the raw body themselves.
    """
    return InboundRequest.build(
        headers=dict(request.headers.items()),
        body=await _parse_body(request),
        query=dict(request.query_params.items()),
        raw=request,
    )


__all__ = ["BearerRequest", "InboundRequest", "read_request"]
