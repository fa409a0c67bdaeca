"""Unit tests for listing, filtering and searching a shop's records."""

from datetime import datetime, timedelta, timezone

import pytest

from oilchange.domain.entities import RecordStatus, ServiceRecord
from oilchange.domain.exceptions import RecordValidationError

_T0 = datetime(2025, 11, 1, 9, 0, tzinfo=timezone.utc)


def _seed(record_repo, record_id, plate, client, minutes, status=RecordStatus.COMPLETE,
          shop_id="shop-1"):
    return record_repo.add(
        ServiceRecord(
            id=record_id,
            shop_id=shop_id,
            operator_id="op-1",
            plate=plate,
            client_name=client,
            ticket_number=f"LUB-{record_id}",
            status=status,
            created_at=_T0 + timedelta(minutes=minutes),
        )
    )


@pytest.fixture
def seeded(record_repo):
    _seed(record_repo, "r1", "AB123CD", "Juan Pérez", 0)
    _seed(record_repo, "r2", "AC001AA", "Ana López", 10, status=RecordStatus.SENT)
    _seed(record_repo, "r3", "ABC123", "Pedro Ruiz", 20, status=RecordStatus.PENDING)
    _seed(record_repo, "r4", "AD555ZZ", "Marta Díaz", 5, status=RecordStatus.PENDING)
    _seed(record_repo, "x1", "AB123CD", "Juan Pérez", 30, shop_id="shop-trial")
    return record_repo


def _ids(records):
    return [r.id for r in records]


@pytest.mark.asyncio
async def test_list_is_newest_first(query_service, seeded):
    records = await query_service.list_records("shop-1")
    assert _ids(records) == ["r3", "r2", "r4", "r1"]


@pytest.mark.asyncio
async def test_equal_timestamps_have_stable_order(query_service, record_repo):
    _seed(record_repo, "a", "AB123CD", "Uno", 0)
    _seed(record_repo, "b", "AB123CD", "Dos", 0)
    first = _ids(await query_service.list_records("shop-1"))
    second = _ids(await query_service.list_records("shop-1"))
    assert first == second == ["b", "a"]


@pytest.mark.asyncio
async def test_search_by_client_name_substring(query_service, seeded):
    records = await query_service.list_records("shop-1", text_query="juan")
    assert [r.plate for r in records] == ["AB123CD"]


@pytest.mark.asyncio
async def test_search_by_exact_plate_is_case_insensitive(query_service, seeded):
    records = await query_service.list_records("shop-1", text_query="ab123cd")
    assert _ids(records) == ["r1"]


@pytest.mark.asyncio
async def test_search_by_partial_plate(query_service, seeded):
    records = await query_service.list_records("shop-1", text_query="ab 123")
    assert _ids(records) == ["r1"]


@pytest.mark.asyncio
async def test_search_without_match_is_empty(query_service, seeded):
    assert await query_service.list_records("shop-1", text_query="zzz") == []


@pytest.mark.asyncio
async def test_status_filter(query_service, seeded):
    pending = await query_service.list_records("shop-1", status_filter="pending")
    assert _ids(pending) == ["r3", "r4"]

    everything = await query_service.list_records("shop-1", status_filter="all")
    assert len(everything) == 4


@pytest.mark.asyncio
async def test_status_filter_combines_with_search(query_service, seeded):
    records = await query_service.list_records("shop-1", status_filter="sent", text_query="juan")
    assert records == []


@pytest.mark.asyncio
async def test_unknown_status_filter_is_rejected(query_service, seeded):
    with pytest.raises(RecordValidationError) as exc_info:
        await query_service.list_records("shop-1", status_filter="archived")
    assert "status" in exc_info.value.errors


@pytest.mark.asyncio
async def test_pending_queue_is_oldest_first(query_service, seeded):
    records = await query_service.list_pending("shop-1")
    assert _ids(records) == ["r4", "r3"]


@pytest.mark.asyncio
async def test_other_shops_are_excluded(query_service, seeded):
    records = await query_service.list_records("shop-trial")
    assert _ids(records) == ["x1"]
