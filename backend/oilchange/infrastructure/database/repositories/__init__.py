from .operator_repository import SQLAlchemyOperatorRepository
from .service_record_repository import SQLAlchemyServiceRecordRepository
from .shop_repository import SQLAlchemyShopRepository

__all__ = [
    "SQLAlchemyOperatorRepository",
    "SQLAlchemyServiceRecordRepository",
    "SQLAlchemyShopRepository",
]
