"""Abstract authentication provider interface (port)."""

from abc import ABC, abstractmethod

from oilchange.domain.entities import AuthIdentity


class AuthProvider(ABC):
    """Port for credential verification — e.g. Firebase Authentication.

    Implementations raise AuthProviderError on rejected credentials and
    TransientIOError when the provider cannot be reached.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short identifier used in logs and error messages."""
        ...

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        """Verify email/password credentials and return the provider identity."""
        ...
