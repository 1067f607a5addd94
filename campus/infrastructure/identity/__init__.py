"""Identity store (external authentication system) client."""

from campus.infrastructure.identity.identity_client import IdentityStoreClient

__all__ = ["IdentityStoreClient"]
