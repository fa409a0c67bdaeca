"""Translation of database driver failures into domain exceptions."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import InterfaceError, OperationalError

from oilchange.domain.exceptions import TransientIOError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def translate_db_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise connection-level failures as TransientIOError.

    Usage:
        async with translate_db_errors("load service record"):
            result = await session.get(...)
    """
    try:
        yield
    except (OperationalError, InterfaceError, OSError) as exc:
        logger.warning("Database failure during %s: %s", operation, exc)
        raise TransientIOError(operation, exc) from exc
