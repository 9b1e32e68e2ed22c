"""HTTP exceptions shared by routes and services.

Usage:
    raise NotFoundError("Alumni", alumni_id)
    raise ForbiddenError("update this employment record")
    raise InvalidTransitionError("submitted", "verified")
"""

import logging
from typing import Any

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class AppException(HTTPException):
    """Base exception that logs itself when raised."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: int = logging.WARNING,
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        context = " ".join(f"{key}={value}" for key, value in log_context.items())
        logger.log(log_level, "%s (%s) %s", detail, status_code, context)
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(AppException):
    """Entity not found (404)."""

    def __init__(self, entity: str, entity_id: str | None = None, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} not found",
            entity_id=entity_id,
            **log_context,
        )


class BadRequestError(AppException):
    """Invalid input that passed schema validation (400)."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            **log_context,
        )


class UnauthorizedError(AppException):
    """Missing or invalid credentials (401)."""

    def __init__(self, detail: str = "Not authenticated", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


class ForbiddenError(AppException):
    """Authenticated but not allowed (403)."""

    def __init__(self, action: str | None = None, **log_context: Any):
        detail = f"Not allowed to {action}" if action else "Access denied"
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            **log_context,
        )


class ConflictError(AppException):
    """Unique constraint style conflicts (409)."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            **log_context,
        )


class InvalidTransitionError(ConflictError):
    """Achievement status change not allowed from the current status."""

    def __init__(self, current: str, target: str, **log_context: Any):
        super().__init__(
            f"Cannot move achievement from '{current}' to '{target}'",
            current=current,
            target=target,
            **log_context,
        )
