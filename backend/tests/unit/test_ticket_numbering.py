"""Unit tests for ticket number formatting and per-shop numbering."""

import pytest

from oilchange.domain.entities import ServiceRecord, Shop
from oilchange.domain.exceptions import EntityNotFoundError
from oilchange.domain.ticket_numbers import (
    format_ticket_number,
    highest_sequence,
    parse_ticket_sequence,
)


def _existing(record_repo, shop_id: str, ticket: str) -> None:
    record_repo.add(
        ServiceRecord(shop_id=shop_id, operator_id="op-1", plate="AB123CD", ticket_number=ticket)
    )


# ── Format helpers ──


def test_format_pads_to_five_digits():
    assert format_ticket_number("LUB", 1) == "LUB-00001"
    assert format_ticket_number("LUB", 43) == "LUB-00043"


def test_format_widens_past_99999():
    assert format_ticket_number("LUB", 100000) == "LUB-100000"


def test_parse_reads_trailing_digits():
    assert parse_ticket_sequence("LUB-00042") == 42
    assert parse_ticket_sequence("MI-TALLER-00007") == 7
    assert parse_ticket_sequence("garbage") is None
    assert parse_ticket_sequence("") is None


def test_highest_sequence_is_numeric_not_lexicographic():
    assert highest_sequence(["LUB-99999", "LUB-100000", "LUB-00002"]) == 100000
    assert highest_sequence([]) == 0


# ── Service ──


@pytest.mark.asyncio
async def test_first_ticket_of_a_shop(ticket_service):
    assert await ticket_service.next_ticket_number("shop-1") == "LUB-00001"


@pytest.mark.asyncio
async def test_next_ticket_follows_highest(ticket_service, record_repo):
    for ticket in ("LUB-00001", "LUB-00042", "LUB-00007"):
        _existing(record_repo, "shop-1", ticket)
    assert await ticket_service.next_ticket_number("shop-1") == "LUB-00043"


@pytest.mark.asyncio
async def test_sequences_are_per_shop(ticket_service, record_repo):
    _existing(record_repo, "shop-trial", "LUB-00500")
    assert await ticket_service.next_ticket_number("shop-1") == "LUB-00001"


@pytest.mark.asyncio
async def test_unparseable_tickets_are_ignored(ticket_service, record_repo):
    _existing(record_repo, "shop-1", "LEGACY")
    _existing(record_repo, "shop-1", "LUB-00003")
    assert await ticket_service.next_ticket_number("shop-1") == "LUB-00004"


@pytest.mark.asyncio
async def test_widens_after_99999(ticket_service, record_repo):
    _existing(record_repo, "shop-1", "LUB-99999")
    assert await ticket_service.next_ticket_number("shop-1") == "LUB-100000"


@pytest.mark.asyncio
async def test_shop_prefix_is_used(ticket_service, shop_repo):
    shop_repo.add(Shop(id="shop-ace", name="Aceites Norte", ticket_prefix="ACE"))
    assert await ticket_service.next_ticket_number("shop-ace") == "ACE-00001"


@pytest.mark.asyncio
async def test_blank_prefix_falls_back_to_default(ticket_service, shop_repo):
    shop_repo.add(Shop(id="shop-blank", name="Sin Prefijo", ticket_prefix="  "))
    assert await ticket_service.next_ticket_number("shop-blank") == "LUB-00001"


@pytest.mark.asyncio
async def test_unknown_shop_raises_not_found(ticket_service):
    with pytest.raises(EntityNotFoundError):
        await ticket_service.next_ticket_number("missing")
