"""
TeamHub domain errors.

Every failure a service can report is one of these. They subclass
``HTTPException`` so FastAPI renders them directly; ``error_code`` lets
the UI tell "log in" apart from "join the team" without parsing text.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class TeamHubError(HTTPException):
    """Base exception for TeamHub."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code
        self.extra = extra or {}


class AuthenticationRequiredError(TeamHubError):
    """No authenticated principal."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="AUTHENTICATION_REQUIRED",
        )


class MembershipRequiredError(TeamHubError):
    """Authenticated, but not on the team roster."""

    def __init__(self, detail: str = "Team membership required"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="MEMBERSHIP_REQUIRED",
        )


class PermissionDeniedError(TeamHubError):
    """Access level or ownership does not allow the action."""

    def __init__(self, detail: str = "Not authorized"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="PERMISSION_DENIED",
        )


class NotFoundError(TeamHubError):
    """Resource not found."""

    def __init__(self, resource: str, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{resource} not found",
            error_code="NOT_FOUND",
            extra={"resource": resource},
        )


class InvalidInputError(TeamHubError):
    """Input is well-formed but not acceptable in the current state."""

    def __init__(self, detail: str, field: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="INVALID_INPUT",
            extra={"field": field} if field else {},
        )


class ConflictError(TeamHubError):
    """The resource already exists."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT",
        )


class StorageError(TeamHubError):
    """Blob storage call failed."""

    def __init__(self, detail: str, operation: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code="STORAGE_ERROR",
            extra={"operation": operation} if operation else {},
        )
