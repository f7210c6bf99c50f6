"""Notification center endpoints."""

from fastapi import APIRouter, HTTPException, status

from src.painel.api.dependencies import CurrentUser, NotificationEngineDep
from src.painel.schemas.notification import (
    Notification,
    NotificationActionResult,
    NotificationList,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationList,
    summary="List notifications",
    description="Active notifications, newest first, with the unread count.",
)
async def list_notifications(
    engine: NotificationEngineDep,
    _user: CurrentUser,
) -> NotificationList:
    return NotificationList(items=engine.notifications, unread=engine.unread_count)


@router.post(
    "/clear",
    response_model=NotificationActionResult,
    summary="Clear all notifications",
    description="Removes every active notification and remembers each id as dismissed.",
)
async def clear_notifications(
    engine: NotificationEngineDep,
    _user: CurrentUser,
) -> NotificationActionResult:
    notice = await engine.clear_all()
    return NotificationActionResult(notifications=engine.notifications, notice=notice)


@router.post(
    "/test",
    response_model=Notification,
    status_code=status.HTTP_201_CREATED,
    summary="Add a test notification",
)
async def add_test_notification(
    engine: NotificationEngineDep,
    _user: CurrentUser,
) -> Notification:
    return await engine.add_test_notification()


@router.post(
    "/{notification_id}/read",
    response_model=NotificationActionResult,
    summary="Mark notification as read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_notification_read(
    notification_id: str,
    engine: NotificationEngineDep,
    _user: CurrentUser,
) -> NotificationActionResult:
    try:
        notice = await engine.mark_as_read(notification_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return NotificationActionResult(notifications=engine.notifications, notice=notice)


@router.delete(
    "/{notification_id}",
    response_model=NotificationActionResult,
    summary="Dismiss notification",
    description="Removes the notification; the same id will never be shown again.",
)
async def dismiss_notification(
    notification_id: str,
    engine: NotificationEngineDep,
    _user: CurrentUser,
) -> NotificationActionResult:
    notice = await engine.dismiss(notification_id)
    return NotificationActionResult(notifications=engine.notifications, notice=notice)
