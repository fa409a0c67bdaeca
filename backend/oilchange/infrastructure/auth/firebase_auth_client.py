"""Firebase Authentication client — implements the AuthProvider interface.

Talks to the Identity Toolkit REST API
(https://identitytoolkit.googleapis.com/v1) using httpx.
"""

import logging

import httpx

from oilchange.application.interfaces import AuthProvider
from oilchange.domain.entities import AuthIdentity
from oilchange.domain.exceptions import AuthProviderError, TransientIOError

logger = logging.getLogger(__name__)


class FirebaseAuthClient(AuthProvider):
    """Infrastructure adapter — verifies email/password credentials with Firebase.

    An injected ``httpx.AsyncClient`` is reused; otherwise a short-lived
    client is created per request.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://identitytoolkit.googleapis.com/v1",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return "firebase"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        """Exchange email/password for an ID token."""
        url = f"{self._base_url}/accounts:signInWithPassword"
        payload = {"email": email, "password": password, "returnSecureToken": True}

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.post(url, params={"key": self._api_key}, json=payload)
        except httpx.TransportError as exc:
            logger.warning("Firebase sign-in request failed: %s", exc)
            raise TransientIOError("sign in", exc) from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code != 200:
            self._raise_provider_error(response)

        data = response.json()
        logger.debug("Firebase accepted credentials for %s", data.get("email", email))
        return AuthIdentity(
            uid=data["localId"],
            email=data.get("email", email),
            id_token=data["idToken"],
            expires_in=int(data.get("expiresIn", 3600)),
        )

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Raise AuthProviderError from a non-200 httpx Response."""
        if response.status_code >= 500:
            raise TransientIOError(
                "sign in", RuntimeError(f"{self.provider_name} returned {response.status_code}")
            )
        try:
            error = response.json().get("error", {})
            code = error.get("message", response.text)
        except ValueError:
            code = response.text

        raise AuthProviderError(
            provider=self.provider_name,
            status_code=response.status_code,
            code=code,
        )
