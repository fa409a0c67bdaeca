"""Domain entity for oil-change service records and their lifecycle."""

import re
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from oilchange.domain.exceptions import InvalidTransitionError, RecordValidationError
from oilchange.domain.projection import (
    DEFAULT_INTERVAL_KM,
    DEFAULT_INTERVAL_MONTHS,
    project_next_date,
    project_next_odometer,
)

NOT_APPLICABLE_NOTE = "S/N"

# Fixed, ordered set of itemized sub-services recorded with every oil change.
ITEMIZED_SERVICES: tuple[str, ...] = (
    "oil_filter",
    "air_filter",
    "fuel_filter",
    "cabin_filter",
    "additive",
    "lubrication",
    "coolant",
    "gearbox",
    "differential",
)

# Old format (ABC123) and Mercosur format (AB123CD).
_PLATE_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{3}[A-Z]{2}$|^[A-Z]{3}[0-9]{3}$")

_REQUIRED_ON_COMPLETION: dict[str, str] = {
    "plate": "plate is required",
    "client_name": "client name is required",
    "oil_type": "oil type is required",
    "oil_brand": "oil brand is required",
    "oil_grade": "SAE viscosity grade is required",
    "oil_quantity": "oil quantity is required",
    "current_km": "current odometer reading is required",
    "next_km": "next service odometer reading is required",
    "service_date": "service date is required",
    "next_service_date": "next service date is required",
}


class RecordStatus(str, Enum):
    """Lifecycle states of a service record."""

    PENDING = "pending"
    COMPLETE = "complete"
    SENT = "sent"


def normalize_plate(plate: str) -> str:
    """Uppercase the plate and strip every whitespace character."""
    return re.sub(r"\s", "", plate or "").upper()


def is_valid_plate(plate: str) -> bool:
    return bool(_PLATE_PATTERN.match(normalize_plate(plate)))


@dataclass
class ItemizedService:
    """One sub-service flag and its note ("S/N" when not performed)."""

    done: bool = False
    note: str = NOT_APPLICABLE_NOTE


def default_services() -> dict[str, ItemizedService]:
    return {name: ItemizedService() for name in ITEMIZED_SERVICES}


def _itemized_from_dict(data: dict[str, Any]) -> ItemizedService:
    """Read a stored sub-service, ignoring keys this version does not know."""
    done = bool(data.get("done", False))
    note = data.get("note")
    if note is None:
        note = "" if done else NOT_APPLICABLE_NOTE
    return ItemizedService(done, note)


@dataclass
class ServiceRecord:
    """Core domain entity: one oil change performed at a shop.

    A record enters as ``pending`` (a placeholder to be finished later) or is
    completed immediately; ``complete`` records become ``sent`` once the
    receipt reaches the customer.
    """

    shop_id: str
    operator_id: str
    plate: str
    id: str | None = None
    ticket_number: str = ""
    shop_name: str = ""
    operator_name: str = ""

    # Client
    client_name: str = ""
    client_phone: str = ""

    # Vehicle
    make: str = ""
    model: str = ""
    year: str = ""
    vehicle_type: str = ""
    current_km: int | None = None
    next_km: int | None = None

    # Service
    service_date: date | None = None
    next_service_date: date | None = None
    interval_months: int = DEFAULT_INTERVAL_MONTHS
    oil_type: str = ""
    oil_brand: str = ""
    oil_grade: str = ""
    oil_quantity: str = ""
    services: dict[str, ItemizedService] = field(default_factory=default_services)
    notes: str = ""

    status: RecordStatus = RecordStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None
    completed_by: str | None = None

    def __post_init__(self) -> None:
        self.plate = normalize_plate(self.plate)
        services = default_services()
        for name, item in (self.services or {}).items():
            if name not in services:
                continue
            if isinstance(item, dict):
                item = _itemized_from_dict(item)
            services[name] = item
        self.services = services

    # ── Itemized services ────────────────────────────────────────────

    def set_service(self, name: str, done: bool, note: str | None = None) -> None:
        """Set one sub-service flag; unchecked flags fall back to the "S/N" note."""
        if name not in ITEMIZED_SERVICES:
            raise RecordValidationError({f"services.{name}": "unknown itemized service"})
        current = self.services[name]
        if not done:
            self.services[name] = ItemizedService(False, note or NOT_APPLICABLE_NOTE)
            return
        if note is None:
            note = "" if current.note == NOT_APPLICABLE_NOTE else current.note
        self.services[name] = ItemizedService(True, note)

    # ── Projections ──────────────────────────────────────────────────

    def fill_projections(self, interval_km: int = DEFAULT_INTERVAL_KM) -> None:
        """Derive next date/odometer where they are still unset."""
        if self.next_service_date is None and self.service_date is not None:
            self.next_service_date = project_next_date(self.service_date, self.interval_months)
        if self.next_km is None and self.current_km is not None:
            self.next_km = project_next_odometer(self.current_km, interval_km)

    def apply_changes(
        self, changes: dict[str, Any], interval_km: int = DEFAULT_INTERVAL_KM
    ) -> None:
        """Apply field edits, re-projecting values the caller did not pin.

        A new service date or interval always recomputes the next service
        date from the current service date; a new odometer reading
        recomputes the next odometer reading.
        """
        for key, value in changes.items():
            if key == "services":
                for name, item in value.items():
                    if isinstance(item, ItemizedService):
                        item = asdict(item)
                    current = self.services.get(name, ItemizedService())
                    self.set_service(name, item.get("done", current.done), item.get("note"))
            elif key == "plate":
                self.plate = normalize_plate(value)
            else:
                setattr(self, key, value)

        if "next_service_date" not in changes and (
            "service_date" in changes or "interval_months" in changes
        ):
            if self.service_date is not None and self.interval_months > 0:
                self.next_service_date = project_next_date(
                    self.service_date, self.interval_months
                )
        if "next_km" not in changes and "current_km" in changes:
            if self.current_km is not None and self.current_km >= 0:
                self.next_km = project_next_odometer(self.current_km, interval_km)

        self.updated_at = datetime.now(timezone.utc)

    # ── Validation ───────────────────────────────────────────────────

    def range_errors(self) -> dict[str, str]:
        """Out-of-range checks that apply in every state."""
        errors: dict[str, str] = {}
        if not self.plate:
            errors["plate"] = "plate is required"
        if self.current_km is not None and self.current_km < 0:
            errors["current_km"] = "odometer reading cannot be negative"
        if (
            self.current_km is not None
            and self.next_km is not None
            and self.next_km < self.current_km
        ):
            errors["next_km"] = "next service odometer must not be lower than the current one"
        if (
            self.service_date is not None
            and self.next_service_date is not None
            and self.next_service_date < self.service_date
        ):
            errors["next_service_date"] = "next service date must not precede the service date"
        if self.interval_months < 1:
            errors["interval_months"] = "interval must be at least 1 month"
        return errors

    def completion_errors(self) -> dict[str, str]:
        """Everything a record needs before it can be complete."""
        errors: dict[str, str] = {}
        for field_name, message in _REQUIRED_ON_COMPLETION.items():
            value = getattr(self, field_name)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field_name] = message
        if "plate" not in errors and not is_valid_plate(self.plate):
            errors["plate"] = "invalid plate format"
        for name, item in self.services.items():
            if item.done and not item.note.strip():
                errors[f"services.{name}"] = "a note is required when the service is performed"
        errors.update(self.range_errors())
        return errors

    # ── Lifecycle ────────────────────────────────────────────────────

    def complete(self, operator_id: str, at: datetime | None = None) -> None:
        """Transition pending → complete."""
        if self.status != RecordStatus.PENDING:
            raise InvalidTransitionError(self.status.value, RecordStatus.COMPLETE.value)
        errors = self.completion_errors()
        if errors:
            raise RecordValidationError(errors)
        now = at or datetime.now(timezone.utc)
        self.status = RecordStatus.COMPLETE
        self.completed_at = now
        self.completed_by = operator_id
        self.updated_at = now

    def mark_sent(self) -> bool:
        """Transition complete → sent. Returns False when already sent."""
        if self.status == RecordStatus.SENT:
            return False
        if self.status != RecordStatus.COMPLETE:
            raise InvalidTransitionError(self.status.value, RecordStatus.SENT.value)
        self.status = RecordStatus.SENT
        self.updated_at = datetime.now(timezone.utc)
        return True

    def to_fields(self) -> dict[str, Any]:
        """Flat field map (services as plain dicts) for diffing and persistence."""
        fields = asdict(self)
        fields.pop("id")
        return fields
