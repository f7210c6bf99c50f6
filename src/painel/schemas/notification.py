from pydantic import BaseModel

from src.painel.models.enums import NotificationType
from src.painel.schemas.common import Notice


class Notification(BaseModel):
    id: str
    title: str
    description: str
    date: str  # display string, dd/mm/yyyy HH:MM:SS
    read: bool = False
    type: NotificationType = NotificationType.INFO


class NotificationList(BaseModel):
    items: list[Notification]
    unread: int


class NotificationActionResult(BaseModel):
    notifications: list[Notification]
    notice: Notice
