"""Helpers for keeping identifiers and credentials out of log lines."""

from __future__ import annotations

import hashlib
from typing import Any

_DIGEST_LENGTH = 12


def _digest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:_DIGEST_LENGTH]


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"
    return f"{prefix}-{_digest(text)}"


def token_fingerprint(token: str | None) -> str:
    """Short hash of a bearer token, safe to log alongside a rejection."""
    return safe_log_identifier(token, prefix="tok")
