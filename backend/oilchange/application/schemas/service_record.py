"""Pydantic DTOs (Data Transfer Objects) for the ServiceRecord feature."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from oilchange.domain.entities import RecordStatus


class ItemizedServiceSchema(BaseModel):
    """A sub-service flag and its note. Omitted notes fall back to "S/N" when not done."""

    done: bool = False
    note: str | None = None

    model_config = {"from_attributes": True}


class _ServiceRecordFields(BaseModel):
    """Editable record fields — all optional, only explicitly set ones are applied."""

    client_name: str | None = Field(None, max_length=100, examples=["Juan Perez"])
    client_phone: str | None = Field(None, max_length=30)
    make: str | None = Field(None, max_length=50, examples=["Toyota"])
    model: str | None = Field(None, max_length=50, examples=["Corolla"])
    year: str | None = Field(None, pattern=r"^[0-9]{4}$", examples=["2019"])
    vehicle_type: str | None = Field(None, max_length=50, examples=["Automovil"])
    current_km: int | None = Field(None, ge=0, le=9_999_999)
    next_km: int | None = Field(None, ge=0, le=9_999_999)
    service_date: date | None = None
    next_service_date: date | None = None
    interval_months: int | None = Field(None, ge=1, examples=[3])
    oil_type: str | None = Field(None, examples=["Sintético"])
    oil_brand: str | None = Field(None, examples=["YPF"])
    oil_grade: str | None = Field(None, examples=["SAE 5W-30"])
    oil_quantity: str | None = Field(None, examples=["4 Litros"])
    services: dict[str, ItemizedServiceSchema] | None = None
    notes: str | None = None


class ServiceRecordCreate(_ServiceRecordFields):
    """Schema for creating a record, either as a pending placeholder or complete."""

    shop_id: str = Field(..., min_length=1)
    plate: str = Field(..., min_length=1, max_length=20, examples=["AB123CD"])
    status: Literal["pending", "complete"] = "complete"


class ServiceRecordComplete(_ServiceRecordFields):
    """Schema for completing a pending record — supplies the remaining fields."""

    plate: str | None = Field(None, min_length=1, max_length=20)


class ServiceRecordUpdate(_ServiceRecordFields):
    """Schema for editing an existing record — all fields optional."""

    plate: str | None = Field(None, min_length=1, max_length=20)


class ServiceRecordResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    ticket_number: str
    shop_id: str
    shop_name: str
    operator_id: str
    operator_name: str
    client_name: str
    client_phone: str
    plate: str
    make: str
    model: str
    year: str
    vehicle_type: str
    current_km: int | None
    next_km: int | None
    service_date: date | None
    next_service_date: date | None
    interval_months: int
    oil_type: str
    oil_brand: str
    oil_grade: str
    oil_quantity: str
    services: dict[str, ItemizedServiceSchema]
    notes: str
    status: RecordStatus
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None
    completed_by: str | None

    model_config = {"from_attributes": True}


class NextTicketResponse(BaseModel):
    shop_id: str
    ticket_number: str


class ReceiptResponse(BaseModel):
    """Rendered receipt — HTML document plus a plain-text message for sharing."""

    ticket_number: str
    file_name: str
    html: str
    share_text: str

    model_config = {"from_attributes": True}
