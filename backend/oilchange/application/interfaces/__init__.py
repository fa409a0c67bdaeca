from .auth_provider import AuthProvider
from .operator_repository import OperatorRepository
from .service_record_repository import ServiceRecordRepository
from .shop_repository import ShopRepository

__all__ = [
    "AuthProvider",
    "OperatorRepository",
    "ServiceRecordRepository",
    "ShopRepository",
]
