"""Status-change notifications with deduplication and permanent dismissal.

The engine listens to project UPDATE events on the change feed. Each status
transition becomes one notification whose id is derived from the project,
both statuses and a coarse time bucket, so repeated deliveries of the same
transition collapse into one entry. Dismissed ids are remembered forever and
suppress any later event that derives the same id.
"""

import asyncio
import random
import re
import time
from collections.abc import Callable
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from src.painel.core.exceptions import GatewayNotInitializedError
from src.painel.core.logging import get_logger
from src.painel.core.realtime import ChangeEvent, ChangeEventType, ChangeFeed
from src.painel.core.state_store import (
    DISMISSED_NOTIFICATIONS_KEY,
    NOTIFICATIONS_KEY,
    StateStore,
)
from src.painel.models.enums import NotificationType
from src.painel.schemas.common import Notice
from src.painel.schemas.notification import Notification

logger = get_logger(__name__)

STATUS_CHANNEL = "project-status-updates"
STATUS_CHANGE_TITLE = "Status de projeto alterado"
DATE_FORMAT = "%d/%m/%Y %H:%M:%S"


def sanitize_status(status: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_]", "", re.sub(r"\s+", "_", status))


def status_notification_id(
    project_id: str,
    old_status: str,
    new_status: str,
    timestamp: float,
    window_seconds: int,
) -> str:
    """Deterministic id for one transition inside one dedup window."""
    bucket = int(timestamp // window_seconds)
    return (
        f"status_{project_id}_{sanitize_status(old_status)}_{sanitize_status(new_status)}_{bucket}"
    )


class NotificationEngine:
    """Active notification list plus the permanent dismissed-id set.

    Every mutation writes both lists through the state store before returning.
    """

    def __init__(
        self,
        store: StateStore,
        dedup_window_seconds: int = 60,
        timezone: str = "America/Sao_Paulo",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not store.loaded:
            raise GatewayNotInitializedError("notification store")
        self._store = store
        self._window = dedup_window_seconds
        self._tz = ZoneInfo(timezone)
        self._clock = clock
        self._lock = asyncio.Lock()
        self._items = self._restore(store.get(NOTIFICATIONS_KEY))
        self._dismissed: list[str] = [str(i) for i in store.get(DISMISSED_NOTIFICATIONS_KEY)]

    @staticmethod
    def _restore(raw_items: list[object]) -> list[Notification]:
        items: list[Notification] = []
        for raw in raw_items:
            try:
                items.append(Notification.model_validate(raw))
            except ValidationError as e:
                logger.warning("Skipping unreadable stored notification", error=str(e))
        return items

    @property
    def notifications(self) -> list[Notification]:
        return list(self._items)

    @property
    def dismissed_ids(self) -> list[str]:
        return list(self._dismissed)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._items if not n.read)

    def format_date(self, moment: datetime) -> str:
        return moment.astimezone(self._tz).strftime(DATE_FORMAT)

    async def _flush(self) -> None:
        await self._store.save(
            {
                NOTIFICATIONS_KEY: [n.model_dump(mode="json") for n in self._items],
                DISMISSED_NOTIFICATIONS_KEY: list(self._dismissed),
            }
        )

    # Change feed

    def subscribe(self, feed: ChangeFeed) -> None:
        feed.subscribe(
            STATUS_CHANNEL,
            table="projects",
            callback=self.handle_change,
            event_type=ChangeEventType.UPDATE,
        )

    def unsubscribe(self, feed: ChangeFeed) -> None:
        feed.remove_channel(STATUS_CHANNEL)

    async def handle_change(self, event: ChangeEvent) -> Notification | None:
        """Turn a project status transition into a notification, if it is new."""
        old_status = event.old.get("status")
        new_status = event.new.get("status")
        project_id = event.new.get("id") or event.old.get("id")
        if not project_id or not old_status or not new_status or old_status == new_status:
            return None

        notification_id = status_notification_id(
            str(project_id),
            str(old_status),
            str(new_status),
            event.committed_at.timestamp(),
            self._window,
        )
        client_name = event.new.get("client_name") or event.old.get("client_name") or ""
        notification = Notification(
            id=notification_id,
            title=STATUS_CHANGE_TITLE,
            description=(
                f'O projeto "{client_name}" foi movido de "{old_status}" para "{new_status}"'
            ),
            date=self.format_date(event.committed_at),
            type=NotificationType.INFO,
        )
        if await self.add(notification):
            return notification
        return None

    # Operations

    async def add(self, notification: Notification) -> bool:
        """Insert at the top unless the id is dismissed or already active."""
        async with self._lock:
            if notification.id in self._dismissed:
                logger.debug("Notification suppressed (dismissed)", notification_id=notification.id)
                return False
            if any(n.id == notification.id for n in self._items):
                logger.debug("Notification suppressed (duplicate)", notification_id=notification.id)
                return False
            self._items.insert(0, notification)
            await self._flush()
        logger.info("Notification added", notification_id=notification.id)
        return True

    async def mark_as_read(self, notification_id: str) -> Notice:
        async with self._lock:
            for index, item in enumerate(self._items):
                if item.id == notification_id:
                    self._items[index] = item.model_copy(update={"read": True})
                    break
            else:
                raise LookupError(f"Notification {notification_id} not found")
            await self._flush()
        return Notice(
            title="Notificação marcada como lida",
            description="A notificação foi atualizada com sucesso.",
        )

    async def dismiss(self, notification_id: str) -> Notice:
        async with self._lock:
            if notification_id not in self._dismissed:
                self._dismissed.append(notification_id)
            self._items = [n for n in self._items if n.id != notification_id]
            await self._flush()
        return Notice(
            title="Notificação removida",
            description="A notificação foi removida com sucesso.",
        )

    async def clear_all(self) -> Notice:
        async with self._lock:
            for item in self._items:
                if item.id not in self._dismissed:
                    self._dismissed.append(item.id)
            self._items = []
            await self._flush()
        return Notice(
            title="Notificações limpas",
            description="Todas as notificações foram removidas com sucesso.",
        )

    async def add_test_notification(self) -> Notification:
        now = self._clock()
        notification = Notification(
            id=f"test_{int(now * 1000)}_{random.randint(0, 9999)}",
            title="Notificação de teste",
            description=(
                "Isto é uma notificação de teste para verificar se o sistema está funcionando"
            ),
            date=self.format_date(datetime.fromtimestamp(now, UTC)),
            type=NotificationType.INFO,
        )
        await self.add(notification)
        return notification
