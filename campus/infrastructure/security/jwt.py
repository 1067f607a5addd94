"""JWT verification for access tokens issued by the identity store.

Uses campus.core.config for secret, algorithm and optional audience. Tokens
are never issued here; sub is the identity id.
"""

from typing import Any

from jose import JWTError, jwt

from campus.core.config import get_settings


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub. The audience is checked only when
    settings.jwt_audience is set.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    options = {
        "require_exp": True,
        "require_sub": True,
        "verify_aud": settings.jwt_audience is not None,
    }
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
