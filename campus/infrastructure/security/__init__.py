"""Security: bearer token verification."""

from campus.infrastructure.security.jwt import verify_token

__all__ = ["verify_token"]
