"""API key authentication and caller identity resolution.

Each API key is an opaque caller token. The tenant key that owns todos is the
SHA-256 digest of that token, so raw keys never reach the store or the logs.
Keys are validated against a comma-separated allow-list from the environment
unless ``APP_API_KEY_REQUIRED=false``.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Annotated

from fastapi import Header, HTTPException, status

from todo_api.adapters.store.base import TenantKey
from todo_api.core.config import settings
from todo_api.core.errors import AuthenticationAppError

logger = logging.getLogger(__name__)


def parse_api_keys(keys_string: str | None) -> set[str]:
    """Parse comma-separated API keys into a set.

    Examples:
        >>> parse_api_keys("key1, key2 , key3 ")
        {'key1', 'key2', 'key3'}
        >>> parse_api_keys(None)
        set()
    """
    if not keys_string:
        return set()
    return {key.strip() for key in keys_string.split(",") if key.strip()}


def hash_api_key(api_key: str) -> str:
    """Short fingerprint of an API key for logs."""
    return hashlib.sha256(api_key.encode()).hexdigest()[:16]


def caller_identity(api_key: str) -> TenantKey:
    """Derive the opaque tenant key owning this caller's todos."""
    return hashlib.sha256(api_key.encode()).digest()


def validate_api_key(provided_key: str) -> None:
    """Validate that provided API key matches configured keys.

    Raises:
        AuthenticationAppError: If the key is not in the allow-list, or
            authentication is required but no keys are configured.
    """
    if not settings.app.api_key_required:
        return

    valid_keys = parse_api_keys(settings.app.api_keys)

    if not valid_keys:
        logger.error(
            "api_key_validation_failed",
            extra={"reason": "api_keys_not_configured"},
        )
        raise AuthenticationAppError(
            code="api_keys_not_configured",
            message="API key authentication is enabled but no valid keys are configured",
            details={"hint": "Set APP_API_KEYS or disable auth with APP_API_KEY_REQUIRED=false"},
        )

    if provided_key not in valid_keys:
        logger.warning(
            "api_key_validation_failed",
            extra={
                "reason": "invalid_api_key",
                "api_key_hash": hash_api_key(provided_key),
            },
        )
        raise AuthenticationAppError(
            code="invalid_api_key",
            message="Invalid or missing API key",
        )


async def verify_api_key(
    x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
) -> None:
    """FastAPI dependency for API key authentication.

    Raises:
        HTTPException: 403 Forbidden if authentication fails.
    """
    if not settings.app.api_key_required:
        logger.debug("auth.skipped", extra={"reason": "auth_required_false"})
        return

    if not x_api_key:
        logger.warning("auth.missing_key", extra={"api_key_present": False})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Missing API key. Provide X-API-Key header.",
        )

    try:
        validate_api_key(x_api_key)
    except AuthenticationAppError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=exc.message,
        ) from exc

    logger.debug("auth.success", extra={"api_key_hash": hash_api_key(x_api_key)})


async def resolve_caller(
    x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
) -> TenantKey:
    """FastAPI dependency returning the calling tenant's key.

    Anonymous callers are always rejected, even with authentication
    disabled, because a todo needs an owner.

    Usage:
        @router.get("/todos", dependencies=[Depends(verify_api_key)])
        async def list_todos(caller: TenantKey = Depends(resolve_caller)): ...

    Raises:
        HTTPException: 403 Forbidden when no API key was supplied.
    """
    if not x_api_key:
        logger.warning("auth.anonymous_caller", extra={"api_key_present": False})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Anonymous callers cannot own todos. Provide X-API-Key header.",
        )
    return caller_identity(x_api_key)
