"""Authentication providers.

``RemoteAuthProvider`` talks to the hosted GoTrue auth API over httpx and
keeps the current session in memory, refreshing it when the access token's
``exp`` claim has passed. ``FixtureAuthProvider`` is the in-memory demo
provider used when no backend is configured; it starts signed in as the demo
admin.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urlencode

import httpx
from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field

from cbc_portal.core.settings import settings
from cbc_portal.data.fixtures import DEMO_EMAIL, DEMO_USER_ID

logger = logging.getLogger(__name__)

# Refresh a little before the token actually expires
EXPIRY_MARGIN_SECONDS = 10
FIXTURE_TOKEN_SECRET = "cbc-portal-fixture-secret"
FIXTURE_TOKEN_LIFETIME_SECONDS = 3600


class AuthProviderError(RuntimeError):
    """Raised when the auth API rejects a request or cannot be reached."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class AuthUser(BaseModel):
    """Identity returned by the auth provider."""

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")


class AuthSession(BaseModel):
    """Tokens for a signed-in user."""

    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None
    user: AuthUser

    model_config = ConfigDict(extra="ignore")

    def token_expiry(self) -> int | None:
        """Return the access token's ``exp`` claim without verifying it."""
        try:
            claims = jwt.get_unverified_claims(self.access_token)
        except JWTError:
            return self.expires_at
        exp = claims.get("exp")
        return int(exp) if exp is not None else self.expires_at

    def is_expired(self, now: float | None = None) -> bool:
        expiry = self.token_expiry()
        if expiry is None:
            return False
        now = time.time() if now is None else now
        return expiry - EXPIRY_MARGIN_SECONDS <= now


class AuthProvider(Protocol):
    """Operations the identity context needs from an auth backend."""

    async def get_session(self) -> AuthSession | None: ...

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession: ...

    async def sign_up(self, email: str, password: str, full_name: str) -> AuthSession | None: ...

    async def sign_in_with_oauth(self, provider: str, redirect_to: str | None = None) -> str: ...

    async def sign_out(self) -> None: ...


@dataclass(frozen=True)
class AuthClientConfig:
    """Immutable configuration for the remote auth provider."""

    auth_url: str | None
    anon_key: str | None
    timeout_seconds: float

    @property
    def configured(self) -> bool:
        return bool(self.auth_url and self.anon_key)


def load_auth_config() -> AuthClientConfig:
    """Build configuration object from global settings."""

    return AuthClientConfig(
        auth_url=settings.auth_url if settings.backend_configured else None,
        anon_key=settings.backend_anon_key,
        timeout_seconds=float(settings.backend_http_timeout_seconds),
    )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if isinstance(body, dict):
        for key in ("error_description", "msg", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"Auth request failed with status {response.status_code}"


class RemoteAuthProvider:
    """HTTP client wrapper for the hosted auth API."""

    def __init__(
        self,
        config: AuthClientConfig | None = None,
        *,
        session: AuthSession | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_auth_config()
        self.session = session
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.config.configured:
            raise AuthProviderError("Auth backend is not configured")

        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.auth_url or "",
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                    headers={"apikey": self.config.anon_key or ""},
                )

        return self._client

    async def _post(
        self,
        path: str,
        payload: dict[str, Any] | None = None,
        *,
        token: str | None = None,
    ) -> dict[str, Any]:
        client = await self._ensure_client()
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await client.post(path, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Auth request %s failed: %s", path, exc)
            raise AuthProviderError(f"Auth request failed: {exc}") from exc

        if response.status_code >= 400:
            raise AuthProviderError(_error_message(response), status=response.status_code)
        if not response.content:
            return {}
        return response.json()

    async def get_session(self) -> AuthSession | None:
        """Return the current session, refreshing an expired access token."""
        if self.session is None:
            return None
        if not self.session.is_expired():
            return self.session
        if not self.session.refresh_token:
            self.session = None
            return None

        logger.info("Access token expired; exchanging refresh token")
        try:
            body = await self._post(
                "/token?grant_type=refresh_token",
                {"refresh_token": self.session.refresh_token},
            )
        except AuthProviderError as exc:
            logger.warning("Session refresh failed: %s", exc.message)
            self.session = None
            return None
        self.session = AuthSession.model_validate(body)
        return self.session

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        body = await self._post(
            "/token?grant_type=password", {"email": email, "password": password}
        )
        self.session = AuthSession.model_validate(body)
        return self.session

    async def sign_up(self, email: str, password: str, full_name: str) -> AuthSession | None:
        """Create an account; returns None while email confirmation is pending."""
        body = await self._post(
            "/signup",
            {"email": email, "password": password, "data": {"full_name": full_name}},
        )
        if "access_token" not in body:
            return None
        self.session = AuthSession.model_validate(body)
        return self.session

    async def sign_in_with_oauth(self, provider: str, redirect_to: str | None = None) -> str:
        """Return the URL that starts the provider's OAuth flow."""
        if not self.config.configured:
            raise AuthProviderError("Auth backend is not configured")
        params = {"provider": provider}
        if redirect_to:
            params["redirect_to"] = redirect_to
        return f"{self.config.auth_url}/authorize?{urlencode(params)}"

    async def sign_out(self) -> None:
        session, self.session = self.session, None
        if session is None:
            return
        await self._post("/logout", token=session.access_token)

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""

        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


def issue_fixture_session(user: AuthUser, *, now: float | None = None) -> AuthSession:
    """Mint a locally signed session for the demo provider."""
    issued = int(time.time() if now is None else now)
    expires_at = issued + FIXTURE_TOKEN_LIFETIME_SECONDS
    token = jwt.encode(
        {"sub": user.id, "email": user.email, "iat": issued, "exp": expires_at},
        FIXTURE_TOKEN_SECRET,
        algorithm="HS256",
    )
    return AuthSession(
        access_token=token,
        refresh_token=str(uuid.uuid4()),
        expires_at=expires_at,
        user=user,
    )


DEMO_USER = AuthUser(id=DEMO_USER_ID, email=DEMO_EMAIL, user_metadata={"full_name": "Demo User"})


class FixtureAuthProvider:
    """In-memory demo auth; any credentials sign in as the demo admin."""

    def __init__(self, *, signed_in: bool = True) -> None:
        self.session: AuthSession | None = issue_fixture_session(DEMO_USER) if signed_in else None

    async def get_session(self) -> AuthSession | None:
        if self.session is not None and self.session.is_expired():
            self.session = issue_fixture_session(self.session.user)
        return self.session

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        self.session = issue_fixture_session(DEMO_USER)
        return self.session

    async def sign_up(self, email: str, password: str, full_name: str) -> AuthSession | None:
        user = AuthUser(id=str(uuid.uuid4()), email=email, user_metadata={"full_name": full_name})
        self.session = issue_fixture_session(user)
        return self.session

    async def sign_in_with_oauth(self, provider: str, redirect_to: str | None = None) -> str:
        self.session = issue_fixture_session(DEMO_USER)
        return redirect_to or "/"

    async def sign_out(self) -> None:
        self.session = None
