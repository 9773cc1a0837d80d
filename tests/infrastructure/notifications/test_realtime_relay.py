"""Tests for websocket relay scheduling."""

from __future__ import annotations

import asyncio
import logging

from app.infrastructure.notifications import WebsocketNotificationRelay


class RecordingManager:
    def __init__(self, *, fail: bool = False, connections: int = 1) -> None:
        self.fail = fail
        self.connection_count = connections
        self.messages: list[dict] = []

    async def broadcast(self, message: dict) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.messages.append(message)


async def _drain() -> None:
    for _ in range(3):
        await asyncio.sleep(0)


def test_relay_sends_on_running_loop(notification_factory):
    manager = RecordingManager()
    relay = WebsocketNotificationRelay(manager)

    async def scenario():
        relay(notification_factory(1))
        assert relay.pending_count == 1
        await _drain()

    asyncio.run(scenario())

    assert relay.pending_count == 0
    assert manager.messages[0]["type"] == "notification"
    assert manager.messages[0]["data"]["id"] == "N1"


def test_relay_logs_failed_broadcast(notification_factory, caplog):
    relay = WebsocketNotificationRelay(RecordingManager(fail=True))

    async def scenario():
        relay(notification_factory(1))
        await _drain()

    with caplog.at_level(logging.ERROR):
        asyncio.run(scenario())

    assert relay.pending_count == 0
    assert "broadcast failed" in caplog.text


def test_relay_skips_when_nobody_is_connected(notification_factory):
    manager = RecordingManager(connections=0)
    relay = WebsocketNotificationRelay(manager)

    async def scenario():
        relay(notification_factory(1))
        assert relay.pending_count == 0

    asyncio.run(scenario())

    assert manager.messages == []
