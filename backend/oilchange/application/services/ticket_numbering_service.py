"""Application service — sequential ticket numbers per shop."""

import logging

from oilchange.application.interfaces import ServiceRecordRepository, ShopRepository
from oilchange.domain.exceptions import EntityNotFoundError
from oilchange.domain.ticket_numbers import (
    DEFAULT_TICKET_PREFIX,
    TICKET_SEQUENCE_WIDTH,
    format_ticket_number,
    highest_sequence,
)

logger = logging.getLogger(__name__)


class TicketNumberingService:
    """Computes the next ``<PREFIX>-NNNNN`` ticket for a shop.

    The highest existing ticket is found numerically (trailing digit run),
    never lexicographically, so widened tickets past 99999 still sort
    correctly. Two concurrent callers can compute the same number; the
    unique (shop, ticket) constraint rejects the second insert and
    ServiceRecordService retries once.
    """

    def __init__(
        self,
        shop_repository: ShopRepository,
        record_repository: ServiceRecordRepository,
        default_prefix: str = DEFAULT_TICKET_PREFIX,
    ):
        self._shops = shop_repository
        self._records = record_repository
        self._default_prefix = default_prefix

    async def next_ticket_number(self, shop_id: str) -> str:
        shop = await self._shops.get_by_id(shop_id)
        if shop is None:
            raise EntityNotFoundError("Shop", shop_id)

        prefix = (shop.ticket_prefix or "").strip() or self._default_prefix
        existing = await self._records.get_ticket_numbers(shop_id)
        sequence = highest_sequence(existing) + 1

        if len(str(sequence)) > TICKET_SEQUENCE_WIDTH:
            logger.warning(
                "Ticket sequence for shop %s exceeds %d digits (%d) — widening field",
                shop_id,
                TICKET_SEQUENCE_WIDTH,
                sequence,
            )

        ticket = format_ticket_number(prefix, sequence)
        logger.debug("Next ticket for shop %s: %s", shop_id, ticket)
        return ticket
