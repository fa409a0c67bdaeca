"""Service record lifecycle endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from oilchange.application.schemas import (
    ReceiptResponse,
    ServiceRecordComplete,
    ServiceRecordCreate,
    ServiceRecordResponse,
    ServiceRecordUpdate,
)
from oilchange.application.services import ReceiptService, ServiceRecordService
from oilchange.infrastructure.dependencies import (
    get_current_operator_id,
    get_receipt_service,
    get_service_record_service,
)
from oilchange.presentation.api.v1.error_mapping import DOMAIN_ERRORS, to_http_error

router = APIRouter(prefix="/service-records", tags=["Service Records"])


@router.post("", response_model=ServiceRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_record(
    data: ServiceRecordCreate,
    operator_id: str = Depends(get_current_operator_id),
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordResponse:
    """Create a record as a pending placeholder or complete in one step."""
    try:
        record = await service.create_record(data, operator_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return ServiceRecordResponse.model_validate(record, from_attributes=True)


@router.get("/{record_id}", response_model=ServiceRecordResponse)
async def get_record(
    record_id: str,
    operator_id: str = Depends(get_current_operator_id),
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordResponse:
    """Retrieve a single service record by ID."""
    try:
        record = await service.get_record(record_id, operator_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return ServiceRecordResponse.model_validate(record, from_attributes=True)


@router.patch("/{record_id}", response_model=ServiceRecordResponse)
async def update_record(
    record_id: str,
    data: ServiceRecordUpdate,
    operator_id: str = Depends(get_current_operator_id),
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordResponse:
    """Edit fields of a record in any status."""
    try:
        record = await service.update_record(record_id, data, operator_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return ServiceRecordResponse.model_validate(record, from_attributes=True)


@router.post("/{record_id}/complete", response_model=ServiceRecordResponse)
async def complete_record(
    record_id: str,
    data: ServiceRecordComplete,
    operator_id: str = Depends(get_current_operator_id),
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordResponse:
    """Finish a pending record."""
    try:
        record = await service.complete_record(record_id, data, operator_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return ServiceRecordResponse.model_validate(record, from_attributes=True)


@router.post("/{record_id}/sent", response_model=ServiceRecordResponse)
async def mark_sent(
    record_id: str,
    operator_id: str = Depends(get_current_operator_id),
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordResponse:
    """Mark a complete record as delivered to the customer."""
    try:
        record = await service.mark_sent(record_id, operator_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return ServiceRecordResponse.model_validate(record, from_attributes=True)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    record_id: str,
    confirm: bool = Query(False, description="Must be true — deletion is permanent"),
    operator_id: str = Depends(get_current_operator_id),
    service: ServiceRecordService = Depends(get_service_record_service),
) -> None:
    """Permanently delete a record."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deletion is permanent; repeat the request with confirm=true",
        )
    try:
        await service.delete_record(record_id, operator_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)


@router.get("/{record_id}/receipt", response_model=ReceiptResponse)
async def get_receipt(
    record_id: str,
    response_format: str = Query("json", alias="format", pattern="^(json|html)$"),
    operator_id: str = Depends(get_current_operator_id),
    records: ServiceRecordService = Depends(get_service_record_service),
    receipts: ReceiptService = Depends(get_receipt_service),
):
    """Rendered receipt as JSON (html + share text) or as the HTML document itself."""
    try:
        await records.get_record(record_id, operator_id)
        receipt = await receipts.render(record_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    if response_format == "html":
        return HTMLResponse(content=receipt.html)
    return ReceiptResponse.model_validate(receipt, from_attributes=True)
