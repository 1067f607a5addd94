"""Identity store admin API client (GoTrue-compatible REST).

Uses the shared httpx.AsyncClient from the app lifespan so connections are
reused. Authenticated with the service-role key. Failures are translated to
domain exceptions here; callers never see httpx errors:

    409, or 422 "already registered"    -> ConflictException
    transport error, timeout, 5xx        -> DependencyException
    other 4xx                            -> ValidationException
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from campus.application.dtos.provisioning import IdentityResult
from campus.domain.exceptions import (
    DependencyException,
    EmailAlreadyRegisteredException,
    ValidationException,
)

logger = logging.getLogger(__name__)

DEPENDENCY = "identity_store"
_DUPLICATE_MARKERS = (
    "already registered",
    "already been registered",
    "already exists",
    "duplicate",
    "email_exists",
)


def _error_message(response: httpx.Response) -> str:
    """Best-effort error text from a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error", "error_code"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.text


def is_duplicate_message(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in _DUPLICATE_MARKERS)


class IdentityStoreClient:
    """IIdentityStore over the GoTrue admin endpoints."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        service_key: str,
        *,
        timeout_seconds: float = 10.0,
        invite_redirect_url: str | None = None,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._timeout = timeout_seconds
        self._invite_redirect_url = invite_redirect_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._service_key}",
            "apikey": self._service_key,
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        email: str | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            response = await self._http.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise DependencyException(DEPENDENCY, f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise DependencyException(DEPENDENCY, f"{method} {path}: {e!s}") from e

        if response.status_code >= 500:
            logger.warning(
                "Identity store %s %s returned %s", method, path, response.status_code
            )
            raise DependencyException(
                DEPENDENCY, f"{method} {path} returned {response.status_code}"
            )
        if response.status_code == 404 and allow_not_found:
            return response
        if response.status_code >= 400:
            message = _error_message(response)
            if response.status_code == 409 or (
                response.status_code == 422 and is_duplicate_message(message)
            ):
                raise EmailAlreadyRegisteredException(email or "")
            raise ValidationException(f"Identity store rejected request: {message}")
        return response

    @staticmethod
    def _to_identity(response: httpx.Response, email: str) -> IdentityResult:
        body = response.json()
        user = body.get("user", body) if isinstance(body, dict) else {}
        identity_id = user.get("id")
        if not identity_id:
            raise DependencyException(DEPENDENCY, "response missing user id")
        return IdentityResult(id=identity_id, email=user.get("email") or email)

    async def create_user(
        self, email: str, password: str, metadata: dict[str, Any] | None = None
    ) -> IdentityResult:
        response = await self._request(
            "POST",
            "/admin/users",
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": metadata or {},
            },
            email=email,
        )
        identity = self._to_identity(response, email)
        logger.info("Created identity %s for %s", identity.id, email)
        return identity

    async def invite_user(
        self, email: str, metadata: dict[str, Any] | None = None
    ) -> IdentityResult:
        params = (
            {"redirect_to": self._invite_redirect_url}
            if self._invite_redirect_url
            else None
        )
        response = await self._request(
            "POST",
            "/invite",
            json={"email": email, "data": metadata or {}},
            params=params,
            email=email,
        )
        identity = self._to_identity(response, email)
        logger.info("Invited identity %s for %s", identity.id, email)
        return identity

    async def delete_user(self, identity_id: str) -> None:
        """Delete identity; 404 means already gone."""
        response = await self._request(
            "DELETE", f"/admin/users/{identity_id}", allow_not_found=True
        )
        if response.status_code == 404:
            logger.info("Identity %s already deleted", identity_id)
            return
        logger.info("Deleted identity %s", identity_id)
