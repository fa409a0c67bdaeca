"""Abstract repository interface (port) for ServiceRecord persistence."""

from abc import ABC, abstractmethod
from typing import Any

from oilchange.domain.entities import RecordStatus, ServiceRecord


class ServiceRecordRepository(ABC):
    """Port for service record persistence — implemented in the infrastructure layer.

    Implementations normalise legacy rows on the way out: a record stored
    without a status is returned (and filtered) as ``complete``.
    """

    @abstractmethod
    async def get_by_id(self, record_id: str) -> ServiceRecord | None:
        """Retrieve a single record by its ID."""
        ...

    @abstractmethod
    async def query(
        self,
        shop_id: str,
        *,
        status: RecordStatus | None = None,
        plate: str | None = None,
        newest_first: bool = True,
    ) -> list[ServiceRecord]:
        """Records of one shop, optionally by status and exact plate, ordered by creation time."""
        ...

    @abstractmethod
    async def get_ticket_numbers(self, shop_id: str) -> list[str]:
        """Every ticket number issued for the shop."""
        ...

    @abstractmethod
    async def create(self, record: ServiceRecord) -> ServiceRecord:
        """Persist a new record and return it with the generated ID.

        Raises DuplicateEntityError when the ticket number is already taken
        for the shop.
        """
        ...

    @abstractmethod
    async def update(self, record_id: str, fields: dict[str, Any]) -> None:
        """Overwrite the given fields of an existing record."""
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...
