"""Core: configuration, lifespan, exception handlers, rate limiter."""

from campus.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
