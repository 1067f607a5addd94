"""Request ID middleware.

Forwards a sanitized client X-Request-ID or generates one, echoes it on the
response, and publishes it to a context variable so log records emitted
while handling the request (saga steps, compensations) carry it.
Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from typing import Callable

from campus.shared.context import request_id_var

REQUEST_ID_MAX_LENGTH = 64
_ALLOWED = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def sanitize_request_id(raw: str | None) -> str:
    """Return raw if it is safe to log; otherwise a fresh UUID4."""
    candidate = (raw or "").strip()
    if _ALLOWED.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """ASGI wrapper adding the request id to scope state, context and response."""
    header_key = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = next(
            (
                v.decode("latin-1")
                for k, v in scope.get("headers", [])
                if k.lower() == header_key
            ),
            None,
        )
        request_id = sanitize_request_id(raw)
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_name.encode(), request_id.encode()),
                ]
            await send(message)

        try:
            await app(scope, receive, send_with_id)
        finally:
            request_id_var.reset(token)

    return asgi_app
