"""Abstract repository interface (port) for Operator persistence."""

from abc import ABC, abstractmethod

from oilchange.domain.entities import Operator


class OperatorRepository(ABC):
    """Port for operator persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, operator_id: str) -> Operator | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Operator | None:
        """Look up an operator by login email (case-insensitive)."""
        ...

    @abstractmethod
    async def create(self, operator: Operator) -> Operator:
        ...
