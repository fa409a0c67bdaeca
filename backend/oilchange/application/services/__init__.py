from .access_guard import AccessGuard
from .auth_service import AuthService
from .receipt_service import ReceiptService
from .record_query_service import RecordQueryService
from .service_record_service import ServiceRecordService
from .session_registry import SessionRegistry
from .ticket_numbering_service import TicketNumberingService

__all__ = [
    "AccessGuard",
    "AuthService",
    "ReceiptService",
    "RecordQueryService",
    "ServiceRecordService",
    "SessionRegistry",
    "TicketNumberingService",
]
