"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from oilchange.config import get_settings
from oilchange.application.services import (
    AccessGuard,
    AuthService,
    ReceiptService,
    RecordQueryService,
    ServiceRecordService,
    SessionRegistry,
    TicketNumberingService,
)
from oilchange.domain.entities import AuthSession
from oilchange.infrastructure.auth import FirebaseAuthClient
from oilchange.infrastructure.database.session import get_db_session
from oilchange.infrastructure.database.repositories import (
    SQLAlchemyOperatorRepository,
    SQLAlchemyServiceRecordRepository,
    SQLAlchemyShopRepository,
)

_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_session_registry() -> SessionRegistry:
    """Process-wide session registry — shared by every request."""
    return SessionRegistry()


def _build_access_guard(session: AsyncSession) -> AccessGuard:
    return AccessGuard(
        shop_repository=SQLAlchemyShopRepository(session),
        operator_repository=SQLAlchemyOperatorRepository(session),
    )


def _build_ticket_service(session: AsyncSession) -> TicketNumberingService:
    settings = get_settings()
    return TicketNumberingService(
        shop_repository=SQLAlchemyShopRepository(session),
        record_repository=SQLAlchemyServiceRecordRepository(session),
        default_prefix=settings.default_ticket_prefix,
    )


async def get_access_guard(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AccessGuard, None]:
    """Provides an AccessGuard over the shop and operator repositories."""
    yield _build_access_guard(session)


async def get_ticket_numbering_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TicketNumberingService, None]:
    """Provides a TicketNumberingService with its repositories wired up."""
    yield _build_ticket_service(session)


async def get_service_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ServiceRecordService, None]:
    """Provides a ServiceRecordService with repository, numbering and guard."""
    settings = get_settings()
    yield ServiceRecordService(
        repository=SQLAlchemyServiceRecordRepository(session),
        ticket_service=_build_ticket_service(session),
        access_guard=_build_access_guard(session),
        interval_km=settings.default_interval_km,
    )


async def get_record_query_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RecordQueryService, None]:
    """Provides a RecordQueryService instance with its repository wired up."""
    yield RecordQueryService(SQLAlchemyServiceRecordRepository(session))


async def get_receipt_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ReceiptService, None]:
    """Provides a ReceiptService with record and shop repositories."""
    settings = get_settings()
    yield ReceiptService(
        record_repository=SQLAlchemyServiceRecordRepository(session),
        shop_repository=SQLAlchemyShopRepository(session),
        due_soon_days=settings.due_soon_days,
    )


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuthService, None]:
    """Provides an AuthService with Firebase as the credential provider."""
    settings = get_settings()
    provider = FirebaseAuthClient(
        api_key=settings.firebase_api_key,
        base_url=settings.firebase_auth_base_url,
        timeout=settings.firebase_timeout_seconds,
    )
    yield AuthService(
        provider=provider,
        operator_repository=SQLAlchemyOperatorRepository(session),
        access_guard=_build_access_guard(session),
        registry=get_session_registry(),
    )


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str:
    """The raw bearer token; 401 when the header is missing."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_session(
    token: str = Depends(get_bearer_token),
    registry: SessionRegistry = Depends(get_session_registry),
) -> AuthSession:
    """The signed-in session behind the bearer token; 401 when unknown."""
    session = registry.get(token)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired or signed out",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def get_current_operator_id(
    session: AuthSession = Depends(get_current_session),
) -> str:
    return session.operator_id
