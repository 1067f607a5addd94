"""Request context using contextvars.

Async-safe storage for request-scoped data read by logging. Set by the
request id middleware; empty outside a request (scripts, startup).
"""

from contextvars import ContextVar

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return request_id_var.get()
