"""Unit tests for the FirebaseAuthClient."""

import json

import httpx
import pytest

from oilchange.infrastructure.auth.firebase_auth_client import FirebaseAuthClient
from oilchange.domain.exceptions import AuthProviderError, TransientIOError


# ── Helpers ──


def _sign_in_response(uid: str = "uid-123", email: str = "carlos@example.com") -> dict:
    return {
        "kind": "identitytoolkit#VerifyPasswordResponse",
        "localId": uid,
        "email": email,
        "displayName": "",
        "idToken": "id-token-abc",
        "registered": True,
        "refreshToken": "refresh-xyz",
        "expiresIn": "3600",
    }


def _make_client(handler) -> FirebaseAuthClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirebaseAuthClient(api_key="test-key", http_client=http_client)


# ── Tests ──


@pytest.mark.asyncio
async def test_sign_in_posts_credentials():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = request.url
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json=_sign_in_response())

    client = _make_client(handler)
    await client.sign_in("carlos@example.com", "secret")

    assert captured["url"].path == "/v1/accounts:signInWithPassword"
    assert captured["url"].params["key"] == "test-key"
    assert captured["body"] == {
        "email": "carlos@example.com",
        "password": "secret",
        "returnSecureToken": True,
    }


@pytest.mark.asyncio
async def test_sign_in_parses_identity():
    client = _make_client(lambda request: httpx.Response(200, json=_sign_in_response()))

    identity = await client.sign_in("carlos@example.com", "secret")

    assert identity.uid == "uid-123"
    assert identity.email == "carlos@example.com"
    assert identity.id_token == "id-token-abc"
    assert identity.expires_in == 3600


@pytest.mark.asyncio
async def test_rejected_credentials_raise_provider_error():
    error = {"error": {"code": 400, "message": "INVALID_PASSWORD", "errors": []}}
    client = _make_client(lambda request: httpx.Response(400, json=error))

    with pytest.raises(AuthProviderError) as exc_info:
        await client.sign_in("carlos@example.com", "wrong")

    assert exc_info.value.provider == "firebase"
    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "INVALID_PASSWORD"


@pytest.mark.asyncio
async def test_non_json_error_body_is_kept_as_code():
    client = _make_client(lambda request: httpx.Response(400, text="Bad Request"))

    with pytest.raises(AuthProviderError) as exc_info:
        await client.sign_in("carlos@example.com", "pw")

    assert exc_info.value.code == "Bad Request"


@pytest.mark.asyncio
async def test_network_failure_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _make_client(handler)

    with pytest.raises(TransientIOError) as exc_info:
        await client.sign_in("carlos@example.com", "pw")

    assert isinstance(exc_info.value.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_server_error_is_transient():
    client = _make_client(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(TransientIOError):
        await client.sign_in("carlos@example.com", "pw")


def test_provider_name():
    assert FirebaseAuthClient(api_key="k").provider_name == "firebase"
