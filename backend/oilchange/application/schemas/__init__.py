from .auth import SessionResponse, SignInRequest
from .service_record import (
    ItemizedServiceSchema,
    NextTicketResponse,
    ReceiptResponse,
    ServiceRecordComplete,
    ServiceRecordCreate,
    ServiceRecordResponse,
    ServiceRecordUpdate,
)

__all__ = [
    "SessionResponse",
    "SignInRequest",
    "ItemizedServiceSchema",
    "NextTicketResponse",
    "ReceiptResponse",
    "ServiceRecordComplete",
    "ServiceRecordCreate",
    "ServiceRecordResponse",
    "ServiceRecordUpdate",
]
