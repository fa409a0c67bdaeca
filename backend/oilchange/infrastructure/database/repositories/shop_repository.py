"""Concrete repository implementation for Shop backed by SQLAlchemy."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from oilchange.application.interfaces import ShopRepository
from oilchange.domain.entities import Shop, ShopStatus
from oilchange.infrastructure.database.errors import translate_db_errors
from oilchange.infrastructure.database.models import ShopModel


class SQLAlchemyShopRepository(ShopRepository):
    """Implements the ShopRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, shop_id: str) -> Shop | None:
        async with translate_db_errors("load shop"):
            model = await self._session.get(ShopModel, shop_id)
        return self._to_entity(model) if model else None

    async def create(self, shop: Shop) -> Shop:
        if not shop.id:
            shop.id = str(uuid.uuid4())
        model = ShopModel(
            id=shop.id,
            name=shop.name,
            legal_name=shop.legal_name,
            tax_id=shop.tax_id,
            address=shop.address,
            phone=shop.phone,
            email=shop.email,
            manager=shop.manager,
            logo_url=shop.logo_url,
            ticket_prefix=shop.ticket_prefix,
            status=shop.status.value,
            trial_ends_at=shop.trial_ends_at,
            created_at=shop.created_at,
            updated_at=shop.updated_at,
        )
        async with translate_db_errors("create shop"):
            self._session.add(model)
            await self._session.flush()
        return shop

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_entity(model: ShopModel) -> Shop:
        return Shop(
            id=model.id,
            name=model.name,
            legal_name=model.legal_name,
            tax_id=model.tax_id,
            address=model.address,
            phone=model.phone,
            email=model.email,
            manager=model.manager,
            logo_url=model.logo_url,
            ticket_prefix=model.ticket_prefix,
            status=ShopStatus(model.status),
            trial_ends_at=model.trial_ends_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
