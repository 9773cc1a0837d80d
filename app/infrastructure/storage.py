"""Key/value storage slots used to persist client-side state."""

from __future__ import annotations

from typing import Callable, Protocol

from sqlalchemy.orm import Session

from app.infrastructure.repositories import StorageEntryRepository


class KeyValueStorage(Protocol):
    """Minimal ``localStorage``-like contract: string keys to string values."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class SqlKeyValueStorage:
    """Store slots in the ``storage_entry`` table, one session per operation."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get_item(self, key: str) -> str | None:
        with self._session_factory() as session:
            return StorageEntryRepository(session).get_value(key)

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            StorageEntryRepository(session).set_value(key, value)

    def remove_item(self, key: str) -> None:
        with self._session_factory() as session:
            StorageEntryRepository(session).delete(key)


class InMemoryKeyValueStorage:
    """Process-local storage used by tests and ephemeral deployments."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


__all__ = ["KeyValueStorage", "SqlKeyValueStorage", "InMemoryKeyValueStorage"]
