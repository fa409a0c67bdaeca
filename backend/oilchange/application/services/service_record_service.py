"""Application service (use case) for the service record lifecycle."""

import logging
from datetime import date
from typing import Any

from oilchange.application.interfaces import ServiceRecordRepository
from oilchange.application.schemas.service_record import (
    ServiceRecordComplete,
    ServiceRecordCreate,
    ServiceRecordUpdate,
)
from oilchange.application.services.access_guard import AccessGuard
from oilchange.application.services.ticket_numbering_service import TicketNumberingService
from oilchange.domain.entities import RecordStatus, ServiceRecord
from oilchange.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    RecordValidationError,
)
from oilchange.domain.projection import DEFAULT_INTERVAL_KM
from oilchange.infrastructure.logging.colored_logger import RecordLogger, RecordStage

logger = logging.getLogger(__name__)
rlog = RecordLogger("ServiceRecordService")


def _dump_fields(data: ServiceRecordCreate | ServiceRecordComplete | ServiceRecordUpdate) -> dict[str, Any]:
    """Only the fields the caller actually sent, without nulls."""
    return data.model_dump(
        exclude_unset=True,
        exclude_none=True,
        exclude={"shop_id", "status"},
    )


class ServiceRecordService:
    """Orchestrates record creation, completion, delivery and edits.

    Depends on the repository port, the ticket numbering service and the
    access guard (DI). Every mutation is authorised against the acting
    operator; reads are authorised when an operator is given.
    """

    def __init__(
        self,
        repository: ServiceRecordRepository,
        ticket_service: TicketNumberingService,
        access_guard: AccessGuard,
        interval_km: int = DEFAULT_INTERVAL_KM,
    ):
        self._repository = repository
        self._tickets = ticket_service
        self._guard = access_guard
        self._interval_km = interval_km

    async def get_record(self, record_id: str, operator_id: str | None = None) -> ServiceRecord:
        record = await self._repository.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError("ServiceRecord", record_id)
        if operator_id is not None:
            await self._guard.authorize(operator_id, record.shop_id)
        return record

    async def create_record(self, data: ServiceRecordCreate, operator_id: str) -> ServiceRecord:
        """Create a record as a pending placeholder or complete in one step."""
        operator, shop = await self._guard.authorize(operator_id, data.shop_id)

        record = ServiceRecord(
            shop_id=shop.id,
            operator_id=operator.id,
            plate=data.plate,
            shop_name=shop.name,
            operator_name=operator.full_name,
        )
        fields = _dump_fields(data)
        fields.pop("plate", None)
        record.apply_changes(fields, interval_km=self._interval_km)

        if data.status == RecordStatus.COMPLETE.value:
            if record.service_date is None:
                record.service_date = date.today()
            record.fill_projections(self._interval_km)
            record.complete(operator.id, at=record.created_at)
        else:
            record.fill_projections(self._interval_km)
            errors = record.range_errors()
            if errors:
                raise RecordValidationError(errors)

        created = await self._insert_with_ticket(record)
        rlog.event(
            RecordStage.CREATED,
            created.ticket_number,
            plate=created.plate,
            status=created.status.value,
        )
        return created

    async def complete_record(
        self, record_id: str, data: ServiceRecordComplete, operator_id: str
    ) -> ServiceRecord:
        """pending → complete, merging the remaining fields first."""
        record = await self.get_record(record_id)
        operator, _ = await self._guard.authorize(operator_id, record.shop_id)
        before = record.to_fields()

        record.apply_changes(_dump_fields(data), interval_km=self._interval_km)
        if record.service_date is None:
            record.service_date = date.today()
        record.fill_projections(self._interval_km)
        try:
            record.complete(operator.id)
        except RecordValidationError as exc:
            rlog.error(record.ticket_number, "completion rejected", error=exc)
            raise

        await self._persist_changes(record, before)
        rlog.event(RecordStage.COMPLETED, record.ticket_number, by=operator.id)
        return record

    async def mark_sent(self, record_id: str, operator_id: str) -> ServiceRecord:
        """complete → sent. Re-marking a sent record changes nothing."""
        record = await self.get_record(record_id)
        await self._guard.authorize(operator_id, record.shop_id)
        before = record.to_fields()

        if not record.mark_sent():
            logger.debug("Record %s already sent — nothing to do", record_id)
            return record

        await self._persist_changes(record, before)
        rlog.event(RecordStage.SENT, record.ticket_number)
        return record

    async def update_record(
        self, record_id: str, data: ServiceRecordUpdate, operator_id: str
    ) -> ServiceRecord:
        """Edit fields in any state; completed records must stay complete-valid."""
        record = await self.get_record(record_id)
        await self._guard.authorize(operator_id, record.shop_id)
        before = record.to_fields()

        record.apply_changes(_dump_fields(data), interval_km=self._interval_km)
        if record.status == RecordStatus.PENDING:
            errors = record.range_errors()
        else:
            errors = record.completion_errors()
        if errors:
            raise RecordValidationError(errors)

        changed = await self._persist_changes(record, before)
        rlog.event(RecordStage.EDITED, record.ticket_number, fields=",".join(sorted(changed)))
        return record

    async def delete_record(self, record_id: str, operator_id: str) -> bool:
        """Hard delete, allowed from any status."""
        record = await self.get_record(record_id)
        await self._guard.authorize(operator_id, record.shop_id)
        deleted = await self._repository.delete(record_id)
        rlog.event(RecordStage.DELETED, record.ticket_number, by=operator_id)
        return deleted

    # ── Internals ────────────────────────────────────────────────────

    async def _insert_with_ticket(self, record: ServiceRecord) -> ServiceRecord:
        """Allocate a ticket and insert; one retry when a concurrent writer took it."""
        record.ticket_number = await self._tickets.next_ticket_number(record.shop_id)
        rlog.event(RecordStage.TICKET, record.ticket_number, shop=record.shop_id)
        try:
            return await self._repository.create(record)
        except DuplicateEntityError:
            logger.warning(
                "Ticket %s already taken in shop %s — recomputing",
                record.ticket_number,
                record.shop_id,
            )

        record.ticket_number = await self._tickets.next_ticket_number(record.shop_id)
        rlog.event(RecordStage.TICKET, record.ticket_number, shop=record.shop_id, retry=True)
        try:
            return await self._repository.create(record)
        except DuplicateEntityError as exc:
            rlog.error(record.ticket_number, "ticket collision persists", error=exc)
            raise

    async def _persist_changes(self, record: ServiceRecord, before: dict[str, Any]) -> dict[str, Any]:
        after = record.to_fields()
        changed = {key: value for key, value in after.items() if before.get(key) != value}
        if changed:
            await self._repository.update(record.id, changed)
        return changed
