"""Domain entity for operators — shop employees who perform services."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class OperatorStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class Operator:
    """A shop employee allowed to record services while active."""

    shop_id: str
    name: str
    id: str | None = None
    last_name: str = ""
    email: str = ""
    role: str = "operator"
    status: OperatorStatus = OperatorStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_login_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == OperatorStatus.ACTIVE
