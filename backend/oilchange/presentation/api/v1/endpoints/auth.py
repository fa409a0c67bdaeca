"""Operator sign-in, sign-out and session endpoints."""

import json

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from oilchange.application.schemas import SessionResponse, SignInRequest
from oilchange.application.services import AuthService, SessionRegistry
from oilchange.domain.entities import AuthSession
from oilchange.infrastructure.dependencies import (
    get_auth_service,
    get_bearer_token,
    get_current_session,
    get_session_registry,
)
from oilchange.presentation.api.v1.error_mapping import DOMAIN_ERRORS, to_http_error

router = APIRouter(prefix="/auth", tags=["Auth"])


def _to_response(session: AuthSession, *, include_token: bool = False) -> SessionResponse:
    return SessionResponse(
        operator_id=session.operator_id,
        shop_id=session.shop_id,
        email=session.email,
        operator_name=session.operator_name,
        shop_name=session.shop_name,
        started_at=session.started_at,
        id_token=session.id_token if include_token else None,
    )


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    data: SignInRequest,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """Verify credentials and open a session. The returned token is the bearer token."""
    try:
        session = await service.sign_in(data.email, data.password)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return _to_response(session, include_token=True)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> None:
    """Close the session behind the bearer token. Unknown tokens are ignored."""
    await service.sign_out(token)


@router.get("/session", response_model=SessionResponse)
async def current_session(
    session: AuthSession = Depends(get_current_session),
) -> SessionResponse:
    """The signed-in operator and shop for the bearer token."""
    return _to_response(session)


# ── SSE Stream ───────────────────────────────────────────────────────


async def _format_events(registry: SessionRegistry, shop_id: str):
    async for event in registry.subscribe(shop_id):
        data = {"occurred_at": event.occurred_at.isoformat()}
        if event.session is not None:
            data.update(
                operator_id=event.session.operator_id,
                shop_id=event.session.shop_id,
                operator_name=event.session.operator_name,
            )
        yield f"event: {event.event}\ndata: {json.dumps(data)}\n\n"


@router.get("/events")
async def session_events(
    session: AuthSession = Depends(get_current_session),
    registry: SessionRegistry = Depends(get_session_registry),
) -> StreamingResponse:
    """SSE endpoint — 'signed_in' / 'signed_out' events of the caller's shop."""
    return StreamingResponse(
        _format_events(registry, session.shop_id),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
