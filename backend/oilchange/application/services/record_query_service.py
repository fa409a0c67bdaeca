"""Application service — listing, filtering and searching a shop's records."""

import logging

from oilchange.application.interfaces import ServiceRecordRepository
from oilchange.domain.entities import RecordStatus, ServiceRecord, normalize_plate
from oilchange.domain.exceptions import RecordValidationError

logger = logging.getLogger(__name__)

STATUS_FILTER_ALL = "all"


def _parse_status_filter(status_filter: str | None) -> RecordStatus | None:
    if status_filter is None or status_filter.strip().lower() in ("", STATUS_FILTER_ALL):
        return None
    try:
        return RecordStatus(status_filter.strip().lower())
    except ValueError:
        allowed = ", ".join([s.value for s in RecordStatus] + [STATUS_FILTER_ALL])
        raise RecordValidationError(
            {"status": f"unknown status filter; expected one of {allowed}"}
        ) from None


def _sort_key(record: ServiceRecord) -> tuple:
    return (record.created_at, record.id or "")


class RecordQueryService:
    """Query/filter engine over the records of a single shop.

    - General listing is newest first; the pending queue is oldest first.
    - Ties on creation time are broken by record id so order is stable.
    - A text query that equals a plate returns only that plate's records;
      otherwise it matches plate or client name as a case-insensitive substring.
    """

    def __init__(self, repository: ServiceRecordRepository):
        self._repository = repository

    async def list_records(
        self,
        shop_id: str,
        *,
        status_filter: str | None = None,
        text_query: str | None = None,
    ) -> list[ServiceRecord]:
        status = _parse_status_filter(status_filter)
        query = (text_query or "").strip()

        if not query:
            records = await self._repository.query(shop_id, status=status)
            return sorted(records, key=_sort_key, reverse=True)

        plate = normalize_plate(query)
        exact = await self._repository.query(shop_id, status=status, plate=plate)
        if exact:
            logger.debug("Exact plate match for %r in shop %s: %d", plate, shop_id, len(exact))
            return sorted(exact, key=_sort_key, reverse=True)

        needle = query.lower()
        candidates = await self._repository.query(shop_id, status=status)
        matches = [
            record
            for record in candidates
            if plate in record.plate or needle in record.client_name.lower()
        ]
        return sorted(matches, key=_sort_key, reverse=True)

    async def list_pending(self, shop_id: str) -> list[ServiceRecord]:
        """Pending records, oldest first — the shop's work queue."""
        records = await self._repository.query(
            shop_id, status=RecordStatus.PENDING, newest_first=False
        )
        return sorted(records, key=_sort_key)
