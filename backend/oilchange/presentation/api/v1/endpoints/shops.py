"""Shop-scoped endpoints — ticket preview and record listings."""

from fastapi import APIRouter, Depends, Query

from oilchange.application.schemas import NextTicketResponse, ServiceRecordResponse
from oilchange.application.services import (
    AccessGuard,
    RecordQueryService,
    TicketNumberingService,
)
from oilchange.infrastructure.dependencies import (
    get_access_guard,
    get_current_operator_id,
    get_record_query_service,
    get_ticket_numbering_service,
)
from oilchange.presentation.api.v1.error_mapping import DOMAIN_ERRORS, to_http_error

router = APIRouter(prefix="/shops/{shop_id}", tags=["Shops"])


@router.get("/next-ticket", response_model=NextTicketResponse)
async def next_ticket(
    shop_id: str,
    operator_id: str = Depends(get_current_operator_id),
    guard: AccessGuard = Depends(get_access_guard),
    service: TicketNumberingService = Depends(get_ticket_numbering_service),
) -> NextTicketResponse:
    """Preview the ticket number the next record of this shop will get."""
    try:
        await guard.authorize(operator_id, shop_id)
        ticket = await service.next_ticket_number(shop_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return NextTicketResponse(shop_id=shop_id, ticket_number=ticket)


@router.get("/service-records", response_model=list[ServiceRecordResponse])
async def list_records(
    shop_id: str,
    status: str | None = Query(None, description="pending, complete, sent or all"),
    q: str | None = Query(None, description="Plate or client name"),
    operator_id: str = Depends(get_current_operator_id),
    guard: AccessGuard = Depends(get_access_guard),
    service: RecordQueryService = Depends(get_record_query_service),
) -> list[ServiceRecordResponse]:
    """Records of the shop, newest first, filtered by status and text query."""
    try:
        await guard.authorize(operator_id, shop_id)
        records = await service.list_records(shop_id, status_filter=status, text_query=q)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return [ServiceRecordResponse.model_validate(r, from_attributes=True) for r in records]


@router.get("/service-records/pending", response_model=list[ServiceRecordResponse])
async def list_pending(
    shop_id: str,
    operator_id: str = Depends(get_current_operator_id),
    guard: AccessGuard = Depends(get_access_guard),
    service: RecordQueryService = Depends(get_record_query_service),
) -> list[ServiceRecordResponse]:
    """Pending records of the shop, oldest first."""
    try:
        await guard.authorize(operator_id, shop_id)
        records = await service.list_pending(shop_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return [ServiceRecordResponse.model_validate(r, from_attributes=True) for r in records]
