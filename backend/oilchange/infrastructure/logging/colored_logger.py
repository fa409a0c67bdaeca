"""Colored record logger — ANSI-colored console logging for service record events.

Provides a RecordLogger with color-coded output per lifecycle stage,
making it easy to follow a ticket from creation to delivery in the terminal.

Color scheme:
    🟢 Green   — Created / Completed
    🔵 Blue    — Edited
    🟣 Magenta — Sent to customer
    🟡 Yellow  — Ticket allocation
    🔴 Red     — Errors / Deleted
    ⚪ Gray    — Details
"""

import logging
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Lifecycle Stage Definitions ──────────────────────────────────────

class RecordStage:
    """Predefined record lifecycle stages with colors and icons."""

    TICKET = ("TICKET", _Colors.YELLOW, "🎫")
    CREATED = ("CREATED", _Colors.GREEN, "📝")
    EDITED = ("EDITED", _Colors.BLUE, "✏️")
    COMPLETED = ("COMPLETED", _Colors.GREEN, "✅")
    SENT = ("SENT", _Colors.MAGENTA, "📤")
    DELETED = ("DELETED", _Colors.RED, "🗑️")
    ERROR = ("ERROR", _Colors.RED, "❌")


# ── RecordLogger ─────────────────────────────────────────────────────

class RecordLogger:
    """Color-coded logger for service record lifecycle events.

    Usage:
        log = RecordLogger("ServiceRecordService")
        log.event(RecordStage.CREATED, "LUB-00042", plate="AB123CD")
        log.detail("Projected next change", next_km=55000)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def event(self, stage: tuple[str, str, str], ticket: str, **kwargs: Any) -> None:
        """Log one lifecycle event for a ticket in its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{ticket}{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    def error(self, ticket: str, message: str, error: Exception | None = None) -> None:
        """Log a failed operation on a ticket in red."""
        label, _, icon = RecordStage.ERROR
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{ticket}: {message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed)."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.DIM}({details}){_Colors.RESET}"
        self._logger.debug(formatted)
