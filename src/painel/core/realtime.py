"""In-process realtime change feed.

Services publish row changes after they commit; subscribers register a
callback under a named channel for one table and event type. Delivery is
at-least-once from the subscriber's point of view: a caller may publish the
same change twice, and consumers deduplicate on their side.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from src.painel.core.logging import get_logger

logger = get_logger(__name__)


class ChangeEventType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ALL = "*"


@dataclass(frozen=True)
class ChangeEvent:
    """A single row change: old and new images keyed by column name."""

    table: str
    event_type: ChangeEventType
    old: dict[str, Any] = field(default_factory=dict)
    new: dict[str, Any] = field(default_factory=dict)
    committed_at: datetime = field(default_factory=lambda: datetime.now(UTC))


ChangeCallback = Callable[[ChangeEvent], Awaitable[None]]


@dataclass
class _Subscription:
    channel: str
    table: str
    event_type: ChangeEventType
    callback: ChangeCallback

    def matches(self, event: ChangeEvent) -> bool:
        if self.table != event.table:
            return False
        return self.event_type in (ChangeEventType.ALL, event.event_type)


class ChangeFeed:
    """Channel-keyed subscription registry with async fan-out."""

    def __init__(self) -> None:
        self._subs: dict[str, _Subscription] = {}

    @property
    def channels(self) -> list[str]:
        return list(self._subs)

    def subscribe(
        self,
        channel: str,
        table: str,
        callback: ChangeCallback,
        event_type: ChangeEventType = ChangeEventType.ALL,
    ) -> None:
        """Register callback under channel, replacing any earlier subscription with that name."""
        if channel in self._subs:
            self.remove_channel(channel)
        self._subs[channel] = _Subscription(channel, table, event_type, callback)
        logger.debug(
            "realtime.subscribed",
            channel=channel,
            table=table,
            event_type=event_type.value,
        )

    def remove_channel(self, channel: str) -> bool:
        removed = self._subs.pop(channel, None) is not None
        if removed:
            logger.debug("realtime.channel_removed", channel=channel)
        return removed

    def remove_all(self) -> None:
        for channel in list(self._subs):
            self.remove_channel(channel)

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver event to every matching subscription in registration order.

        A failing callback is logged and does not stop delivery to the others.
        """
        targets = [sub for sub in self._subs.values() if sub.matches(event)]
        logger.info(
            "realtime.publish",
            table=event.table,
            event_type=event.event_type.value,
            listeners=len(targets),
        )
        for sub in targets:
            try:
                await sub.callback(event)
            except Exception as e:
                logger.error(
                    "realtime.callback_error",
                    channel=sub.channel,
                    table=event.table,
                    error=str(e),
                    exc_info=True,
                )


_feed: ChangeFeed | None = None


def get_change_feed() -> ChangeFeed:
    """Return the process-wide change feed."""
    global _feed
    if _feed is None:
        _feed = ChangeFeed()
    return _feed


def reset_change_feed() -> None:
    """Drop all subscriptions and the singleton (for tests and shutdown)."""
    global _feed
    if _feed is not None:
        _feed.remove_all()
    _feed = None
