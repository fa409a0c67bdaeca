"""Application service — decides whether an operator may act on a shop's data."""

import logging
from datetime import datetime

from oilchange.application.interfaces import OperatorRepository, ShopRepository
from oilchange.domain.entities import Operator, Shop
from oilchange.domain.exceptions import EntityNotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


class AccessGuard:
    """Only active operators of an active (or unexpired trial) shop may write."""

    def __init__(
        self,
        shop_repository: ShopRepository,
        operator_repository: OperatorRepository,
    ):
        self._shops = shop_repository
        self._operators = operator_repository

    async def authorize(
        self,
        operator_id: str,
        shop_id: str | None = None,
        *,
        now: datetime | None = None,
    ) -> tuple[Operator, Shop]:
        """Return the operator and their shop, or raise UnauthorizedError.

        When ``shop_id`` is given the operator must belong to that shop.
        """
        operator = await self._operators.get_by_id(operator_id)
        if operator is None:
            raise EntityNotFoundError("Operator", operator_id)
        if not operator.is_active:
            logger.warning("Rejected inactive operator %s", operator_id)
            raise UnauthorizedError(
                "operator_inactive",
                "Your operator account is inactive. Contact support to reactivate it.",
            )
        if shop_id is not None and operator.shop_id != shop_id:
            logger.warning(
                "Operator %s (shop %s) attempted access to shop %s",
                operator_id,
                operator.shop_id,
                shop_id,
            )
            raise UnauthorizedError(
                "foreign_shop", "This record belongs to a different shop."
            )

        shop = await self._shops.get_by_id(operator.shop_id)
        if shop is None:
            raise EntityNotFoundError("Shop", operator.shop_id)
        if shop.trial_expired(now):
            raise UnauthorizedError(
                "trial_expired",
                "The free trial period has ended. Contact support to activate the account.",
            )
        if not shop.is_operational(now):
            raise UnauthorizedError(
                "shop_inactive",
                "The shop you belong to is inactive. Contact support for more information.",
            )
        return operator, shop
