"""SQLAlchemy model for key/value storage slots."""

from sqlalchemy import Column, DateTime, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class StorageEntryModel(Base):
    """Database representation of a single named storage slot."""

    __tablename__ = "storage_entry"

    key = Column(String(120), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["StorageEntryModel"]
