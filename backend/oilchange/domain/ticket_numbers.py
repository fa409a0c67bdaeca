"""Ticket number format: ``<PREFIX>-<zero-padded sequence>``."""

import re

DEFAULT_TICKET_PREFIX = "LUB"
TICKET_SEQUENCE_WIDTH = 5

_TRAILING_SEQUENCE = re.compile(r"-(\d+)$")


def format_ticket_number(prefix: str, sequence: int) -> str:
    """Build a ticket number; sequences beyond the padded width widen the field."""
    if sequence < 1:
        raise ValueError("ticket sequence starts at 1")
    return f"{prefix}-{sequence:0{TICKET_SEQUENCE_WIDTH}d}"


def parse_ticket_sequence(ticket_number: str | None) -> int | None:
    """Extract the trailing digit run after the last ``-``, or None if absent."""
    if not ticket_number:
        return None
    match = _TRAILING_SEQUENCE.search(ticket_number.strip())
    if match is None:
        return None
    return int(match.group(1))


def highest_sequence(ticket_numbers: list[str]) -> int:
    """Numeric maximum of the parseable tickets, 0 when there are none."""
    sequences = [
        seq for seq in (parse_ticket_sequence(t) for t in ticket_numbers) if seq is not None
    ]
    return max(sequences, default=0)
