"""Shared in-memory fakes of the repository ports and service fixtures."""

import copy
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from oilchange.application.interfaces import (
    OperatorRepository,
    ServiceRecordRepository,
    ShopRepository,
)
from oilchange.application.services import (
    AccessGuard,
    RecordQueryService,
    ServiceRecordService,
    TicketNumberingService,
)
from oilchange.domain.entities import (
    ItemizedService,
    Operator,
    RecordStatus,
    ServiceRecord,
    Shop,
    ShopStatus,
)
from oilchange.domain.exceptions import DuplicateEntityError, EntityNotFoundError

SHOP_ID = "shop-1"
OPERATOR_ID = "op-1"


class FakeShopRepository(ShopRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._shops: dict[str, Shop] = {}

    def add(self, shop: Shop) -> Shop:
        self._shops[shop.id] = shop
        return shop

    async def get_by_id(self, shop_id: str) -> Shop | None:
        return self._shops.get(shop_id)

    async def create(self, shop: Shop) -> Shop:
        shop.id = shop.id or str(uuid.uuid4())
        return self.add(shop)


class FakeOperatorRepository(OperatorRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._operators: dict[str, Operator] = {}

    def add(self, operator: Operator) -> Operator:
        self._operators[operator.id] = operator
        return operator

    async def get_by_id(self, operator_id: str) -> Operator | None:
        return self._operators.get(operator_id)

    async def get_by_email(self, email: str) -> Operator | None:
        for operator in self._operators.values():
            if operator.email.lower() == email.strip().lower():
                return operator
        return None

    async def create(self, operator: Operator) -> Operator:
        operator.id = operator.id or str(uuid.uuid4())
        return self.add(operator)


class FakeServiceRecordRepository(ServiceRecordRepository):
    """In-memory fake that stores copies, like a real database would.

    ``steal_next_ticket()`` simulates a concurrent writer inserting the same
    ticket number just before the next ``create``.
    """

    def __init__(self):
        self._records: dict[str, ServiceRecord] = {}
        self._steal_next = False
        self.create_calls = 0

    def steal_next_ticket(self) -> None:
        self._steal_next = True

    def add(self, record: ServiceRecord) -> ServiceRecord:
        record.id = record.id or str(uuid.uuid4())
        self._records[record.id] = copy.deepcopy(record)
        return record

    async def get_by_id(self, record_id: str) -> ServiceRecord | None:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record else None

    async def query(
        self,
        shop_id: str,
        *,
        status: RecordStatus | None = None,
        plate: str | None = None,
        newest_first: bool = True,
    ) -> list[ServiceRecord]:
        records = [
            copy.deepcopy(r)
            for r in self._records.values()
            if r.shop_id == shop_id
            and (status is None or r.status == status)
            and (plate is None or r.plate == plate)
        ]
        records.sort(key=lambda r: (r.created_at, r.id), reverse=newest_first)
        return records

    async def get_ticket_numbers(self, shop_id: str) -> list[str]:
        return [r.ticket_number for r in self._records.values() if r.shop_id == shop_id]

    async def create(self, record: ServiceRecord) -> ServiceRecord:
        self.create_calls += 1
        if self._steal_next:
            self._steal_next = False
            rival = copy.deepcopy(record)
            rival.id = None
            self.add(rival)
        for existing in self._records.values():
            if (existing.shop_id, existing.ticket_number) == (
                record.shop_id,
                record.ticket_number,
            ):
                raise DuplicateEntityError("ServiceRecord", "ticket_number", record.ticket_number)
        record.id = str(uuid.uuid4())
        self._records[record.id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    async def update(self, record_id: str, fields: dict[str, Any]) -> None:
        stored = self._records.get(record_id)
        if stored is None:
            raise EntityNotFoundError("ServiceRecord", record_id)
        for key, value in fields.items():
            if key == "services":
                value = {
                    name: item if isinstance(item, ItemizedService) else ItemizedService(**item)
                    for name, item in value.items()
                }
            setattr(stored, key, copy.deepcopy(value))

    async def delete(self, record_id: str) -> bool:
        return self._records.pop(record_id, None) is not None


# ── Fixtures ──


@pytest.fixture
def shop_repo() -> FakeShopRepository:
    repo = FakeShopRepository()
    repo.add(
        Shop(
            id=SHOP_ID,
            name="Lubricentro Central",
            address="Av. Siempre Viva 742",
            phone="+54 351 555-0100",
            email="central@example.com",
            tax_id="30-12345678-9",
            status=ShopStatus.ACTIVE,
        )
    )
    repo.add(
        Shop(
            id="shop-trial",
            name="Lubricentro Prueba",
            status=ShopStatus.TRIAL,
            trial_ends_at=datetime.now(timezone.utc) - timedelta(days=1),
        )
    )
    return repo


@pytest.fixture
def operator_repo() -> FakeOperatorRepository:
    repo = FakeOperatorRepository()
    repo.add(Operator(id=OPERATOR_ID, shop_id=SHOP_ID, name="Carlos", last_name="Gómez",
                      email="carlos@example.com"))
    return repo


@pytest.fixture
def record_repo() -> FakeServiceRecordRepository:
    return FakeServiceRecordRepository()


@pytest.fixture
def guard(shop_repo, operator_repo) -> AccessGuard:
    return AccessGuard(shop_repo, operator_repo)


@pytest.fixture
def ticket_service(shop_repo, record_repo) -> TicketNumberingService:
    return TicketNumberingService(shop_repo, record_repo)


@pytest.fixture
def record_service(record_repo, ticket_service, guard) -> ServiceRecordService:
    return ServiceRecordService(record_repo, ticket_service, guard)


@pytest.fixture
def query_service(record_repo) -> RecordQueryService:
    return RecordQueryService(record_repo)
