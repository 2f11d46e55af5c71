"""
Request-scoped caller context.

Holds the identity (email) of the authenticated caller for the duration of a
request. Backed by a ContextVar, so every thread and every asyncio task sees
its own value and nothing leaks between concurrent requests.

The request-handling layer sets the caller once authentication succeeds:

    with authenticated_as(user.email):
        await service.update("new@example.com")

Services also accept the caller explicitly; the context is only the fallback.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

_current_principal: ContextVar[Optional[str]] = ContextVar(
    "current_principal", default=None
)


def get_current_principal_identity() -> Optional[str]:
    """Return the email of the current caller, or None if unauthenticated."""
    return _current_principal.get()


def set_current_principal(email: Optional[str]) -> Token:
    """
    Set the current caller.

    Returns:
        Token to pass to reset_current_principal() when the request ends.
    """
    return _current_principal.set(email)


def reset_current_principal(token: Token) -> None:
    """Restore the caller that was active before set_current_principal()."""
    _current_principal.reset(token)


def clear_current_principal() -> None:
    """Drop any caller for the current context (for testing)."""
    _current_principal.set(None)


@contextmanager
def authenticated_as(email: Optional[str]) -> Iterator[None]:
    """Run a block with the given caller set in the context."""
    token = set_current_principal(email)
    try:
        yield
    finally:
        reset_current_principal(token)
