import json
import time

import httpx
import pytest
from jose import jwt

from cbc_portal.services.auth_provider import (
    DEMO_USER,
    AuthClientConfig,
    AuthProviderError,
    AuthSession,
    FixtureAuthProvider,
    RemoteAuthProvider,
    issue_fixture_session,
)

CONFIG = AuthClientConfig(auth_url="https://db.test/auth/v1", anon_key="anon", timeout_seconds=1.0)
USER = {"id": "user-1", "email": "alice@example.edu"}


def _token(exp: float) -> str:
    return jwt.encode({"sub": "user-1", "exp": int(exp)}, "secret", algorithm="HS256")


def _session_body(exp: float) -> dict:
    return {"access_token": _token(exp), "refresh_token": "refresh-1", "user": USER}


def _provider(handler, **kwargs) -> RemoteAuthProvider:
    return RemoteAuthProvider(CONFIG, transport=httpx.MockTransport(handler), **kwargs)


def test_expiry_comes_from_token_claims() -> None:
    now = time.time()
    fresh = AuthSession.model_validate(_session_body(now + 3600))
    stale = AuthSession.model_validate(_session_body(now + 5))

    assert not fresh.is_expired(now)
    assert stale.is_expired(now)


def test_opaque_token_falls_back_to_expires_at() -> None:
    session = AuthSession(access_token="opaque", expires_at=100, user=USER)

    assert session.token_expiry() == 100
    assert session.is_expired(now=200)


@pytest.mark.asyncio
async def test_password_sign_in() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_session_body(time.time() + 3600))

    provider = _provider(handler)
    session = await provider.sign_in_with_password("alice@example.edu", "secret")

    assert session.user.email == "alice@example.edu"
    assert await provider.get_session() is session
    assert seen[0].url.path == "/auth/v1/token"
    assert seen[0].url.params["grant_type"] == "password"
    assert seen[0].headers["apikey"] == "anon"


@pytest.mark.asyncio
async def test_rejected_credentials_raise_with_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error_description": "Invalid login credentials"})

    with pytest.raises(AuthProviderError) as exc_info:
        await _provider(handler).sign_in_with_password("alice@example.edu", "wrong")

    assert exc_info.value.message == "Invalid login credentials"
    assert exc_info.value.status == 400


@pytest.mark.asyncio
async def test_expired_session_is_refreshed() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_session_body(time.time() + 3600))

    expired = AuthSession.model_validate(_session_body(time.time() - 60))
    provider = _provider(handler, session=expired)

    session = await provider.get_session()

    assert session is not expired
    assert not session.is_expired()
    assert seen[0].url.params["grant_type"] == "refresh_token"
    assert json.loads(seen[0].content) == {"refresh_token": "refresh-1"}


@pytest.mark.asyncio
async def test_failed_refresh_drops_session() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"msg": "Invalid Refresh Token"})

    provider = _provider(handler, session=AuthSession.model_validate(_session_body(time.time() - 60)))

    assert await provider.get_session() is None
    assert provider.session is None


@pytest.mark.asyncio
async def test_sign_up_pending_confirmation_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": "user-1", "email": "alice@example.edu"})

    assert await _provider(handler).sign_up("alice@example.edu", "secret", "Alice") is None


@pytest.mark.asyncio
async def test_oauth_url_and_sign_out() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    provider = _provider(handler, session=AuthSession.model_validate(_session_body(time.time() + 3600)))

    url = await provider.sign_in_with_oauth("github", "https://club.example/callback")
    await provider.sign_out()
    await provider.close()

    assert url.startswith("https://db.test/auth/v1/authorize?provider=github")
    assert "redirect_to=https%3A%2F%2Fclub.example%2Fcallback" in url
    assert seen[0].url.path == "/auth/v1/logout"
    assert seen[0].headers["authorization"].startswith("Bearer ")
    assert provider.session is None


@pytest.mark.asyncio
async def test_unconfigured_provider_raises() -> None:
    provider = RemoteAuthProvider(AuthClientConfig(auth_url=None, anon_key=None, timeout_seconds=1.0))

    with pytest.raises(AuthProviderError):
        await provider.sign_in_with_password("a@b.co", "x")


@pytest.mark.asyncio
async def test_fixture_provider_reissues_expired_demo_session() -> None:
    provider = FixtureAuthProvider()
    provider.session = issue_fixture_session(DEMO_USER, now=time.time() - 7200)

    session = await provider.get_session()

    assert not session.is_expired()
    assert session.user.id == DEMO_USER.id
