"""
Base exception classes for the Accounts backend.

Every error kind carries the HTTP status the enclosing web layer should
answer with, so a single handler can turn any AccountsError into a response:

    except AccountsError as e:
        return JSONResponse(e.to_dict(), status_code=e.status_code)
"""

from typing import Optional, Any


class AccountsError(Exception):
    """
    Base exception for all Accounts errors.

    Subclasses pick an HTTP status via the status_code class attribute and
    a machine-readable code per instance (defaults to the class name).
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Response body for the error; details are omitted when empty."""
        body: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class NotFoundError(AccountsError):
    """Resource not found."""

    status_code = 404


class ValidationError(AccountsError):
    """Input rejected by a business rule."""

    status_code = 400


class ConflictError(AccountsError):
    """Write rejected because it collides with existing state."""

    status_code = 409


class AuthenticationError(AccountsError):
    """No valid caller (missing, unknown or wrong credentials)."""

    status_code = 401


class AuthorizationError(AccountsError):
    """Caller is known but not allowed to do this."""

    status_code = 403


class ExternalServiceError(AccountsError):
    """A backing service (the user store) failed."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
