"""SQLAlchemy ORM model for the ServiceRecord entity."""

from datetime import date, datetime, timezone

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from oilchange.infrastructure.database.base import Base


class ServiceRecordModel(Base):
    """ORM model — maps to the 'service_records' table.

    ``status`` is nullable: rows imported from the legacy system carry no
    status and are read back as complete.
    """

    __tablename__ = "service_records"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    ticket_number: Mapped[str] = mapped_column(String(32), nullable=False)
    shop_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("shops.id", ondelete="CASCADE"), nullable=False
    )
    shop_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    operator_id: Mapped[str] = mapped_column(String(128), nullable=False)
    operator_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    client_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    client_phone: Mapped[str] = mapped_column(String(30), nullable=False, default="")

    plate: Mapped[str] = mapped_column(String(20), nullable=False)
    make: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    model: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    year: Mapped[str] = mapped_column(String(4), nullable=False, default="")
    vehicle_type: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    current_km: Mapped[int | None] = mapped_column(Integer, nullable=True)
    next_km: Mapped[int | None] = mapped_column(Integer, nullable=True)

    service_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_service_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    interval_months: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    oil_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    oil_brand: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    oil_grade: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    oil_quantity: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    services: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_by: Mapped[str | None] = mapped_column(String(128), nullable=True)

    __table_args__ = (
        UniqueConstraint("shop_id", "ticket_number", name="uq_service_records_shop_ticket"),
        Index("ix_service_records_shop_created", "shop_id", "created_at"),
        Index("ix_service_records_shop_status", "shop_id", "status"),
        Index("ix_service_records_shop_plate", "shop_id", "plate"),
    )

    def __repr__(self) -> str:
        return (
            f"<ServiceRecordModel(id={self.id}, "
            f"ticket='{self.ticket_number}', status='{self.status}')>"
        )
