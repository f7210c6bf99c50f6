"""Tests for the in-process change feed."""

import pytest

from src.painel.core.realtime import (
    ChangeEvent,
    ChangeEventType,
    ChangeFeed,
    get_change_feed,
    reset_change_feed,
)

pytestmark = pytest.mark.unit


def update_event(table: str = "projects") -> ChangeEvent:
    return ChangeEvent(table=table, event_type=ChangeEventType.UPDATE, new={"id": "1"})


async def test_delivers_matching_events_only():
    feed = ChangeFeed()
    received: list[ChangeEvent] = []

    async def callback(event: ChangeEvent) -> None:
        received.append(event)

    feed.subscribe("c", table="projects", callback=callback, event_type=ChangeEventType.UPDATE)

    await feed.publish(update_event())
    await feed.publish(update_event(table="model_templates"))
    await feed.publish(ChangeEvent(table="projects", event_type=ChangeEventType.DELETE))

    assert len(received) == 1


async def test_resubscribe_replaces_channel():
    feed = ChangeFeed()
    first: list[ChangeEvent] = []
    second: list[ChangeEvent] = []

    async def on_first(event: ChangeEvent) -> None:
        first.append(event)

    async def on_second(event: ChangeEvent) -> None:
        second.append(event)

    feed.subscribe("status", table="projects", callback=on_first)
    feed.subscribe("status", table="projects", callback=on_second)
    await feed.publish(update_event())

    assert feed.channels == ["status"]
    assert first == []
    assert len(second) == 1


async def test_failing_callback_does_not_stop_others():
    feed = ChangeFeed()
    received: list[ChangeEvent] = []

    async def broken(event: ChangeEvent) -> None:
        raise RuntimeError("boom")

    async def healthy(event: ChangeEvent) -> None:
        received.append(event)

    feed.subscribe("a", table="projects", callback=broken)
    feed.subscribe("b", table="projects", callback=healthy)
    await feed.publish(update_event())

    assert len(received) == 1


def test_singleton_reset():
    feed = get_change_feed()
    assert get_change_feed() is feed
    reset_change_feed()
    assert get_change_feed() is not feed
