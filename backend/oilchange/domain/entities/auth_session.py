"""Domain entities for authenticated operator sessions."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone


@dataclass
class AuthIdentity:
    """Identity returned by the authentication provider after sign-in."""

    uid: str
    email: str
    id_token: str
    expires_in: int = 3600


@dataclass
class AuthSession:
    """A signed-in operator together with the shop they work for.

    The session lives as long as the provider's ID token: ``expires_at``
    defaults to one hour after ``started_at``.
    """

    operator_id: str
    shop_id: str
    email: str
    operator_name: str
    shop_name: str
    id_token: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.expires_at is None:
            self.expires_at = self.started_at + timedelta(hours=1)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


@dataclass
class SessionEvent:
    """Session change notification delivered to subscribers of the same shop."""

    event: str  # "signed_in" | "signed_out"
    session: AuthSession | None = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
