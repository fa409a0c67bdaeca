"""Concrete repository implementation for ServiceRecord backed by SQLAlchemy."""

import logging
import uuid
from dataclasses import asdict
from enum import Enum
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from oilchange.application.interfaces import ServiceRecordRepository
from oilchange.domain.entities import ItemizedService, RecordStatus, ServiceRecord
from oilchange.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from oilchange.infrastructure.database.errors import translate_db_errors
from oilchange.infrastructure.database.models import ServiceRecordModel

logger = logging.getLogger(__name__)

_COLUMNS = frozenset(
    column.key for column in ServiceRecordModel.__table__.columns if column.key != "id"
)


def _to_column_value(key: str, value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if key == "services":
        return {
            name: asdict(item) if isinstance(item, ItemizedService) else dict(item)
            for name, item in value.items()
        }
    return value


class SQLAlchemyServiceRecordRepository(ServiceRecordRepository):
    """Implements the ServiceRecordRepository port using SQLAlchemy async sessions.

    Legacy rows with a NULL status are read back — and filtered — as complete.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ServiceRecordModel) -> ServiceRecord:
        """Map ORM model → domain entity."""
        return ServiceRecord(
            id=model.id,
            ticket_number=model.ticket_number,
            shop_id=model.shop_id,
            shop_name=model.shop_name,
            operator_id=model.operator_id,
            operator_name=model.operator_name,
            client_name=model.client_name,
            client_phone=model.client_phone,
            plate=model.plate,
            make=model.make,
            model=model.model,
            year=model.year,
            vehicle_type=model.vehicle_type,
            current_km=model.current_km,
            next_km=model.next_km,
            service_date=model.service_date,
            next_service_date=model.next_service_date,
            interval_months=model.interval_months,
            oil_type=model.oil_type,
            oil_brand=model.oil_brand,
            oil_grade=model.oil_grade,
            oil_quantity=model.oil_quantity,
            services=dict(model.services or {}),
            notes=model.notes,
            status=RecordStatus(model.status) if model.status else RecordStatus.COMPLETE,
            created_at=model.created_at,
            updated_at=model.updated_at,
            completed_at=model.completed_at,
            completed_by=model.completed_by,
        )

    def _to_model(self, entity: ServiceRecord) -> ServiceRecordModel:
        """Map domain entity → ORM model (for creation)."""
        values = {
            key: _to_column_value(key, value)
            for key, value in entity.to_fields().items()
            if key in _COLUMNS
        }
        return ServiceRecordModel(id=entity.id, **values)

    async def get_by_id(self, record_id: str) -> ServiceRecord | None:
        async with translate_db_errors("load service record"):
            result = await self._session.get(ServiceRecordModel, record_id)
        return self._to_entity(result) if result else None

    async def query(
        self,
        shop_id: str,
        *,
        status: RecordStatus | None = None,
        plate: str | None = None,
        newest_first: bool = True,
    ) -> list[ServiceRecord]:
        stmt = select(ServiceRecordModel).where(ServiceRecordModel.shop_id == shop_id)

        if status == RecordStatus.COMPLETE:
            stmt = stmt.where(
                or_(
                    ServiceRecordModel.status == RecordStatus.COMPLETE.value,
                    ServiceRecordModel.status.is_(None),
                )
            )
        elif status is not None:
            stmt = stmt.where(ServiceRecordModel.status == status.value)
        if plate is not None:
            stmt = stmt.where(ServiceRecordModel.plate == plate)

        if newest_first:
            stmt = stmt.order_by(
                ServiceRecordModel.created_at.desc(), ServiceRecordModel.id.desc()
            )
        else:
            stmt = stmt.order_by(
                ServiceRecordModel.created_at.asc(), ServiceRecordModel.id.asc()
            )

        async with translate_db_errors("query service records"):
            result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_ticket_numbers(self, shop_id: str) -> list[str]:
        stmt = select(ServiceRecordModel.ticket_number).where(
            ServiceRecordModel.shop_id == shop_id
        )
        async with translate_db_errors("read ticket numbers"):
            result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, record: ServiceRecord) -> ServiceRecord:
        if not record.id:
            record.id = str(uuid.uuid4())
        model = self._to_model(record)
        try:
            async with translate_db_errors("create service record"):
                async with self._session.begin_nested():
                    self._session.add(model)
        except IntegrityError as exc:
            logger.info(
                "Ticket %s already exists in shop %s", record.ticket_number, record.shop_id
            )
            record.id = None
            raise DuplicateEntityError(
                "ServiceRecord", "ticket_number", record.ticket_number
            ) from exc
        return self._to_entity(model)

    async def update(self, record_id: str, fields: dict[str, Any]) -> None:
        async with translate_db_errors("update service record"):
            model = await self._session.get(ServiceRecordModel, record_id)
            if model is None:
                raise EntityNotFoundError("ServiceRecord", record_id)
            for key, value in fields.items():
                if key in _COLUMNS:
                    setattr(model, key, _to_column_value(key, value))
            await self._session.flush()

    async def delete(self, record_id: str) -> bool:
        async with translate_db_errors("delete service record"):
            model = await self._session.get(ServiceRecordModel, record_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        return True
