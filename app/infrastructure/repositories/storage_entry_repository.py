"""Persistence helpers for key/value storage slots."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.infrastructure.models import StorageEntryModel


class StorageEntryRepository:
    """Provide read and write access to named storage slots."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_value(self, key: str) -> str | None:
        model = self.session.get(StorageEntryModel, key)
        return model.value if model else None

    def set_value(self, key: str, value: str) -> None:
        """Create or overwrite the slot ``key`` with ``value``."""

        model = self.session.get(StorageEntryModel, key)
        if model is None:
            model = StorageEntryModel(key=key, value=value)
        else:
            model.value = value
        self.session.add(model)
        self.session.commit()

    def delete(self, key: str) -> bool:
        model = self.session.get(StorageEntryModel, key)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True


__all__ = ["StorageEntryRepository"]
