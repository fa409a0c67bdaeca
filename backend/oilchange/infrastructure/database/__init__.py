from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import OperatorModel, ServiceRecordModel, ShopModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "OperatorModel",
    "ServiceRecordModel",
    "ShopModel",
]
