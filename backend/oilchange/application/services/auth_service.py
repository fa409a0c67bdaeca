"""Application service (use case) for operator sign-in and sessions."""

import logging
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

from oilchange.application.interfaces import AuthProvider, OperatorRepository
from oilchange.application.services.access_guard import AccessGuard
from oilchange.application.services.auth_errors import describe_auth_error
from oilchange.application.services.session_registry import SessionRegistry
from oilchange.domain.entities import AuthSession, SessionEvent
from oilchange.domain.exceptions import AuthProviderError, UnauthorizedError

logger = logging.getLogger(__name__)


class AuthService:
    """Signs operators in through the auth provider and tracks their sessions.

    After the provider accepts the credentials, the operator must exist
    locally, be active, and belong to an operational shop; otherwise no
    session is opened.
    """

    def __init__(
        self,
        provider: AuthProvider,
        operator_repository: OperatorRepository,
        access_guard: AccessGuard,
        registry: SessionRegistry,
    ):
        self._provider = provider
        self._operators = operator_repository
        self._guard = access_guard
        self._registry = registry

    async def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            identity = await self._provider.sign_in(email.strip(), password)
        except AuthProviderError as exc:
            reason, message = describe_auth_error(exc.code)
            logger.info("Sign-in rejected by %s for %s: %s", exc.provider, email, exc.code)
            raise UnauthorizedError(reason, message) from exc

        operator = await self._operators.get_by_id(identity.uid)
        if operator is None:
            operator = await self._operators.get_by_email(identity.email)
        if operator is None:
            logger.warning("Authenticated %s has no operator profile", identity.email)
            raise UnauthorizedError(
                "operator_not_found",
                "No operator profile is linked to this account. Contact support.",
            )

        operator, shop = await self._guard.authorize(operator.id)

        started_at = datetime.now(timezone.utc)
        session = AuthSession(
            operator_id=operator.id,
            shop_id=shop.id,
            email=identity.email,
            operator_name=operator.full_name,
            shop_name=shop.name,
            id_token=identity.id_token,
            started_at=started_at,
            expires_at=started_at + timedelta(seconds=identity.expires_in),
        )
        await self._registry.open(session)
        logger.info("Operator %s signed in to shop %s", operator.id, shop.id)
        return session

    async def sign_out(self, token: str) -> None:
        session = await self._registry.close(token)
        if session is not None:
            logger.info("Operator %s signed out", session.operator_id)

    def current_session(self, token: str | None) -> AuthSession | None:
        if not token:
            return None
        return self._registry.get(token)

    def subscribe(self, shop_id: str) -> AsyncGenerator[SessionEvent, None]:
        """Stream of ``signed_in`` / ``signed_out`` events of one shop."""
        return self._registry.subscribe(shop_id)
