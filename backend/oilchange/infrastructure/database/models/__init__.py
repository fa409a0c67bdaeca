from .service_record import ServiceRecordModel
from .shop import OperatorModel, ShopModel

__all__ = [
    "OperatorModel",
    "ServiceRecordModel",
    "ShopModel",
]
