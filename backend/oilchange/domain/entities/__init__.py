from .auth_session import AuthIdentity, AuthSession, SessionEvent
from .operator import Operator, OperatorStatus
from .receipt import Receipt
from .service_record import (
    ITEMIZED_SERVICES,
    NOT_APPLICABLE_NOTE,
    ItemizedService,
    RecordStatus,
    ServiceRecord,
    is_valid_plate,
    normalize_plate,
)
from .shop import Shop, ShopStatus

__all__ = [
    "AuthIdentity",
    "AuthSession",
    "SessionEvent",
    "Operator",
    "OperatorStatus",
    "Receipt",
    "ITEMIZED_SERVICES",
    "NOT_APPLICABLE_NOTE",
    "ItemizedService",
    "RecordStatus",
    "ServiceRecord",
    "is_valid_plate",
    "normalize_plate",
    "Shop",
    "ShopStatus",
]
