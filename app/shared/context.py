"""Request context management using contextvars.

Holds the request ID for the current request so log records emitted from
deep inside the search path (comment fetches, reader warnings) can be tied
back to the HTTP request that caused them.

Usage:
    token = set_request_id("abc123")
    ...
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Set the request ID for the current task; returns a token for reset."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _request_id.get()
