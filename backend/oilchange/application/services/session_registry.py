"""Session registry — in-process store of signed-in operators and change events."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from datetime import datetime

from oilchange.domain.entities import AuthSession, SessionEvent

logger = logging.getLogger(__name__)


def _close(queue: asyncio.Queue[SessionEvent | None]) -> None:
    """Drop undelivered events so the end-of-stream sentinel always fits."""
    while queue.full():
        queue.get_nowait()
    queue.put_nowait(None)


class SessionRegistry:
    """Keeps active sessions by token and broadcasts session changes.

    Each subscriber gets its own asyncio.Queue bound to one shop; publishing
    pushes an event only to the queues of the session's shop. Expired
    sessions are evicted on lookup and whenever a new session opens.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._sessions: dict[str, AuthSession] = {}
        self._queues: dict[asyncio.Queue[SessionEvent | None], str] = {}
        self._max_queue_size = max_queue_size

    def get(self, token: str, now: datetime | None = None) -> AuthSession | None:
        session = self._sessions.get(token)
        if session is not None and session.is_expired(now):
            del self._sessions[token]
            logger.info("Session of operator %s expired", session.operator_id)
            return None
        return session

    async def open(self, session: AuthSession) -> None:
        self.purge_expired()
        self._sessions[session.id_token] = session
        await self.publish(SessionEvent(event="signed_in", session=session))

    async def close(self, token: str) -> AuthSession | None:
        session = self._sessions.pop(token, None)
        if session is not None:
            await self.publish(SessionEvent(event="signed_out", session=session))
        return session

    def purge_expired(self, now: datetime | None = None) -> int:
        """Drop every expired session; returns how many were removed."""
        expired = [token for token, s in self._sessions.items() if s.is_expired(now)]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)

    async def subscribe(self, shop_id: str) -> AsyncGenerator[SessionEvent, None]:
        """Yield session events of ``shop_id`` until shutdown; unsubscribes on exit."""
        queue: asyncio.Queue[SessionEvent | None] = asyncio.Queue(self._max_queue_size)
        self._queues[queue] = shop_id
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            self._queues.pop(queue, None)

    async def publish(self, event: SessionEvent) -> None:
        shop_id = event.session.shop_id if event.session else None
        dead_queues: list[asyncio.Queue[SessionEvent | None]] = []
        for queue, subscribed_shop in self._queues.items():
            if subscribed_shop != shop_id:
                continue
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("Session subscriber queue full — disconnecting")

        for q in dead_queues:
            del self._queues[q]
            _close(q)

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for queue in self._queues:
            _close(queue)
        self._queues.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)
