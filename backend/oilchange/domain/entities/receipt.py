"""Domain entity for rendered service receipts."""

from dataclasses import dataclass


@dataclass
class Receipt:
    """A service receipt ready to be printed or shared with the customer."""

    ticket_number: str
    html: str
    share_text: str
    file_name: str
