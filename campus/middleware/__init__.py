"""Raw ASGI middleware: request id and request timeout."""

from campus.middleware.request_id import RequestIDMiddleware
from campus.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware"]
