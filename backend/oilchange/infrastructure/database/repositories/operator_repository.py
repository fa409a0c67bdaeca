"""Concrete repository implementation for Operator backed by SQLAlchemy."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from oilchange.application.interfaces import OperatorRepository
from oilchange.domain.entities import Operator, OperatorStatus
from oilchange.infrastructure.database.errors import translate_db_errors
from oilchange.infrastructure.database.models import OperatorModel


class SQLAlchemyOperatorRepository(OperatorRepository):
    """Implements the OperatorRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, operator_id: str) -> Operator | None:
        async with translate_db_errors("load operator"):
            model = await self._session.get(OperatorModel, operator_id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Operator | None:
        stmt = select(OperatorModel).where(
            func.lower(OperatorModel.email) == email.strip().lower()
        )
        async with translate_db_errors("find operator by email"):
            result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, operator: Operator) -> Operator:
        if not operator.id:
            operator.id = str(uuid.uuid4())
        model = OperatorModel(
            id=operator.id,
            shop_id=operator.shop_id,
            name=operator.name,
            last_name=operator.last_name,
            email=operator.email,
            role=operator.role,
            status=operator.status.value,
            created_at=operator.created_at,
            last_login_at=operator.last_login_at,
        )
        async with translate_db_errors("create operator"):
            self._session.add(model)
            await self._session.flush()
        return operator

    @staticmethod
    def _to_entity(model: OperatorModel) -> Operator:
        return Operator(
            id=model.id,
            shop_id=model.shop_id,
            name=model.name,
            last_name=model.last_name,
            email=model.email,
            role=model.role,
            status=OperatorStatus(model.status),
            created_at=model.created_at,
            last_login_at=model.last_login_at,
        )
