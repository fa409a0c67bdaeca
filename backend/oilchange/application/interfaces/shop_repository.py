"""Abstract repository interface (port) for Shop persistence."""

from abc import ABC, abstractmethod

from oilchange.domain.entities import Shop


class ShopRepository(ABC):
    """Port for shop persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, shop_id: str) -> Shop | None:
        """Retrieve a single shop by its ID."""
        ...

    @abstractmethod
    async def create(self, shop: Shop) -> Shop:
        """Persist a new shop and return it with the generated ID."""
        ...
