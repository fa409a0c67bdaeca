"""Domain entity for shops — the tenant boundary for service records."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ShopStatus(str, Enum):
    """Subscription states of a shop."""

    ACTIVE = "active"
    TRIAL = "trial"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


@dataclass
class Shop:
    """An oil-change shop. Every record and ticket sequence is scoped to one."""

    name: str
    id: str | None = None
    legal_name: str = ""
    tax_id: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    manager: str = ""
    logo_url: str | None = None
    ticket_prefix: str | None = None
    status: ShopStatus = ShopStatus.ACTIVE
    trial_ends_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def trial_expired(self, now: datetime | None = None) -> bool:
        """True when the shop is on trial and the trial end date has passed."""
        if self.status != ShopStatus.TRIAL:
            return False
        if self.trial_ends_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        ends_at = self.trial_ends_at
        if ends_at.tzinfo is None:
            ends_at = ends_at.replace(tzinfo=timezone.utc)
        return now > ends_at

    def is_operational(self, now: datetime | None = None) -> bool:
        """Active shops, and trial shops whose trial has not expired."""
        if self.status == ShopStatus.ACTIVE:
            return True
        return self.status == ShopStatus.TRIAL and not self.trial_expired(now)
