"""Tests for the notification publisher state and fan-out rules."""

from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from app.domain.entities import NotificationSnapshot
from app.infrastructure.notifications import NotificationPublisher, NotificationSnapshotStore
from app.infrastructure.storage import InMemoryKeyValueStorage


@pytest.fixture()
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture()
def publisher(storage: InMemoryKeyValueStorage) -> NotificationPublisher:
    instance = NotificationPublisher(NotificationSnapshotStore(storage), capacity=20)
    instance.start()
    yield instance
    instance.close()


def _unread(publisher: NotificationPublisher) -> int:
    return sum(1 for n in publisher.list_notifications() if not n.read)


def test_publishing_21_evicts_the_oldest(publisher, notification_factory):
    for index in range(1, 22):
        publisher.publish(notification_factory(index))

    ids = [n.id for n in publisher.list_notifications()]
    assert len(ids) == 20
    assert ids == [f"N{index}" for index in range(21, 1, -1)]
    assert "N1" not in ids
    assert publisher.get_unread_count() == 20


def test_retained_list_never_exceeds_capacity(storage, notification_factory):
    publisher = NotificationPublisher(NotificationSnapshotStore(storage, capacity=3), capacity=3)
    publisher.start()

    for index in range(1, 11):
        publisher.publish(notification_factory(index))
        retained = publisher.list_notifications()
        assert len(retained) <= 3
        assert retained[0].id == f"N{index}"

    assert [n.id for n in publisher.list_notifications()] == ["N10", "N9", "N8"]


def test_unread_count_matches_list_after_mixed_operations(publisher, notification_factory):
    for index in range(1, 8):
        publisher.publish(notification_factory(index, read=index == 4))
    assert publisher.get_unread_count() == _unread(publisher) == 6

    publisher.mark_as_read("N2")
    publisher.mark_as_read("N4")
    publisher.mark_as_read("missing")
    assert publisher.get_unread_count() == _unread(publisher) == 5

    publisher.publish(notification_factory(8))
    assert publisher.get_unread_count() == _unread(publisher) == 6


def test_unread_count_tracks_evicted_unread_items(storage, notification_factory):
    publisher = NotificationPublisher(NotificationSnapshotStore(storage, capacity=2), capacity=2)
    publisher.start()

    publisher.publish(notification_factory(1))
    publisher.publish(notification_factory(2, read=True))
    publisher.publish(notification_factory(3, read=True))

    assert publisher.get_unread_count() == 0


def test_mark_as_read_is_idempotent(publisher, notification_factory):
    publisher.publish(notification_factory(1))

    assert publisher.mark_as_read("N1") is True
    assert publisher.mark_as_read("N1") is False
    assert publisher.get("N1").read is True
    assert publisher.get_unread_count() == 0


def test_mark_as_read_unknown_id_does_not_change_count(publisher, notification_factory):
    publisher.publish(notification_factory(1))

    assert publisher.mark_as_read("unknown") is False
    assert publisher.get_unread_count() == 1


def test_mark_all_as_read(publisher, notification_factory):
    for index in range(1, 4):
        publisher.publish(notification_factory(index))

    assert publisher.mark_all_as_read() == 3
    assert publisher.get_unread_count() == 0
    assert all(n.read for n in publisher.list_notifications())
    assert publisher.mark_all_as_read() == 0


def test_subscribers_run_in_subscription_order(publisher, notification_factory):
    calls: list[tuple[str, str]] = []
    publisher.subscribe(lambda n: calls.append(("first", n.id)))
    publisher.subscribe(lambda n: calls.append(("second", n.id)))

    publisher.publish(notification_factory(1))
    publisher.publish(notification_factory(2))

    assert calls == [("first", "N1"), ("second", "N1"), ("first", "N2"), ("second", "N2")]


def test_unsubscribe_stops_delivery(publisher, notification_factory):
    received: list[str] = []
    unsubscribe = publisher.subscribe(lambda n: received.append(n.id))

    publisher.publish(notification_factory(1))
    unsubscribe()
    unsubscribe()
    publisher.publish(notification_factory(2))

    assert received == ["N1"]


def test_failing_subscriber_stops_later_subscribers(publisher, notification_factory):
    received: list[str] = []

    def broken(_notification):
        raise RuntimeError("boom")

    publisher.subscribe(broken)
    publisher.subscribe(lambda n: received.append(n.id))

    with pytest.raises(RuntimeError, match="boom"):
        publisher.publish(notification_factory(1))

    assert received == []
    assert publisher.get("N1") is not None
    assert publisher.get_unread_count() == 1


def test_watchers_receive_full_snapshot_after_each_mutation(publisher, notification_factory):
    snapshots: list[NotificationSnapshot] = []
    publisher.watch(snapshots.append)

    publisher.publish(notification_factory(1))
    publisher.publish(notification_factory(2))
    publisher.mark_as_read("N1")
    publisher.mark_all_as_read()

    assert [s.unread_count for s in snapshots] == [1, 2, 1, 0]
    assert [n.id for n in snapshots[1].notifications] == ["N2", "N1"]
    assert snapshots[1].notifications[1].read is False
    assert snapshots[2].notifications[1].read is True


def test_republishing_an_id_moves_it_to_the_head(publisher, notification_factory):
    publisher.publish(notification_factory(1))
    publisher.publish(notification_factory(2))
    publisher.publish(notification_factory(1))

    assert [n.id for n in publisher.list_notifications()] == ["N1", "N2"]
    assert publisher.get_unread_count() == 2


def test_state_is_persisted_after_every_mutation(storage, publisher, notification_factory):
    publisher.publish(notification_factory(1))
    publisher.publish(notification_factory(2))
    publisher.mark_as_read("N2")

    reloaded = NotificationPublisher(NotificationSnapshotStore(storage), capacity=20)
    reloaded.start()

    assert reloaded.list_notifications() == publisher.list_notifications()
    assert reloaded.get_unread_count() == 1


def test_start_recovers_from_corrupt_snapshot(storage):
    storage.set_item("notifications", "[{\"id\": \"N1\", \"type\"")
    publisher = NotificationPublisher(NotificationSnapshotStore(storage), capacity=20)

    publisher.start()

    assert publisher.list_notifications() == []
    assert publisher.get_unread_count() == 0


def test_clear_all_removes_snapshot(storage, publisher, notification_factory):
    publisher.publish(notification_factory(1))

    publisher.clear_all()

    assert publisher.list_notifications() == []
    assert publisher.get_unread_count() == 0
    assert storage.get_item("notifications") is None


def test_list_notifications_filters(publisher, notification_factory):
    publisher.publish(notification_factory(1, notification_type="alert_created"))
    publisher.publish(notification_factory(2, notification_type="stock_low", read=True))
    publisher.publish(notification_factory(3, notification_type="alert_created", read=True))

    assert [n.id for n in publisher.list_notifications(unread_only=True)] == ["N1"]
    assert [
        n.id for n in publisher.list_notifications(notification_type="alert_created")
    ] == ["N3", "N1"]


def test_close_drops_subscribers(publisher, notification_factory):
    received: list[str] = []
    publisher.subscribe(lambda n: received.append(n.id))

    publisher.close()
    publisher.publish(notification_factory(1))

    assert received == []


def test_capacity_must_be_positive(storage):
    with pytest.raises(ValueError):
        NotificationPublisher(NotificationSnapshotStore(storage), capacity=0)


def test_start_survives_deeply_nested_snapshot():
    storage = InMemoryKeyValueStorage({"notifications": "[" * 100000})
    publisher = NotificationPublisher(NotificationSnapshotStore(storage), capacity=20)

    publisher.start()

    assert publisher.started is True
    assert publisher.list_notifications() == []


def test_returned_notifications_cannot_be_mutated(publisher, notification_factory):
    publisher.publish(notification_factory(1))

    with pytest.raises(dataclasses.FrozenInstanceError):
        publisher.get("N1").read = True

    assert publisher.get("N1").read is False
    assert publisher.get_unread_count() == _unread(publisher) == 1


class FailingStorage(InMemoryKeyValueStorage):
    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def set_item(self, key: str, value: str) -> None:
        if self.fail:
            raise RuntimeError("storage unavailable")
        super().set_item(key, value)


def test_failed_save_leaves_state_unchanged(notification_factory):
    storage = FailingStorage()
    publisher = NotificationPublisher(NotificationSnapshotStore(storage), capacity=20)
    publisher.start()
    publisher.publish(notification_factory(1))

    storage.fail = True
    with pytest.raises(RuntimeError, match="storage unavailable"):
        publisher.publish(notification_factory(2))
    with pytest.raises(RuntimeError, match="storage unavailable"):
        publisher.mark_as_read("N1")
    with pytest.raises(RuntimeError, match="storage unavailable"):
        publisher.mark_all_as_read()

    assert [n.id for n in publisher.list_notifications()] == ["N1"]
    assert publisher.get_unread_count() == 1

    reloaded = NotificationPublisher(NotificationSnapshotStore(storage), capacity=20)
    reloaded.start()
    assert reloaded.list_notifications() == publisher.list_notifications()


def test_unserializable_payload_is_not_retained(publisher, notification_factory):
    bad = dataclasses.replace(notification_factory(1), data={"when": datetime(2024, 3, 1)})

    with pytest.raises(TypeError):
        publisher.publish(bad)

    assert publisher.list_notifications() == []
    assert publisher.get_unread_count() == 0
