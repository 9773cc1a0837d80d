"""Tests for the SQLAlchemy-backed key/value storage."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.infrastructure.models import StorageEntryModel
from app.infrastructure.database import Base
from app.infrastructure.notifications import NotificationPublisher, NotificationSnapshotStore
from app.infrastructure.storage import SqlKeyValueStorage


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


def test_set_get_and_overwrite(session_factory):
    storage = SqlKeyValueStorage(session_factory)

    assert storage.get_item("notifications") is None
    storage.set_item("notifications", "[]")
    storage.set_item("notifications", '[{"id": "N1"}]')

    assert storage.get_item("notifications") == '[{"id": "N1"}]'
    with session_factory() as session:
        assert session.query(StorageEntryModel).count() == 1


def test_remove_item_is_safe_for_missing_keys(session_factory):
    storage = SqlKeyValueStorage(session_factory)
    storage.set_item("notifications", "[]")

    storage.remove_item("notifications")
    storage.remove_item("notifications")

    assert storage.get_item("notifications") is None


def test_publisher_state_survives_restart(session_factory, notification_factory):
    first = NotificationPublisher(
        NotificationSnapshotStore(SqlKeyValueStorage(session_factory)), capacity=20
    )
    first.start()
    first.publish(notification_factory(1))
    first.publish(notification_factory(2))
    first.mark_as_read("N1")
    first.close()

    second = NotificationPublisher(
        NotificationSnapshotStore(SqlKeyValueStorage(session_factory)), capacity=20
    )
    second.start()

    assert [n.id for n in second.list_notifications()] == ["N2", "N1"]
    assert second.get("N1").read is True
    assert second.get_unread_count() == 1
