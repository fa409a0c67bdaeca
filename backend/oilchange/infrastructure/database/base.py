"""SQLAlchemy declarative base for the shop, operator and service record tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models; ``Base.metadata`` drives create_all."""
