"""Integration tests for the notification center endpoints."""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

pytestmark = pytest.mark.integration


async def test_empty_list(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/v1/notifications", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"items": [], "unread": 0}


async def test_test_notification_lifecycle(client: AsyncClient, auth_headers: dict):
    created = await client.post("/api/v1/notifications/test", headers=auth_headers)
    assert created.status_code == 201
    notification_id = created.json()["id"]

    read = await client.post(
        f"/api/v1/notifications/{notification_id}/read", headers=auth_headers
    )
    assert read.status_code == 200
    assert read.json()["notifications"][0]["read"] is True
    assert read.json()["notice"]["title"] == "Notificação marcada como lida"

    listed = await client.get("/api/v1/notifications", headers=auth_headers)
    assert listed.json()["unread"] == 0

    dismissed = await client.delete(
        f"/api/v1/notifications/{notification_id}", headers=auth_headers
    )
    assert dismissed.json()["notifications"] == []
    assert dismissed.json()["notice"]["title"] == "Notificação removida"


async def test_mark_unknown_as_read(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/v1/notifications/nope/read", headers=auth_headers)
    assert response.status_code == 404


async def test_clear_all_suppresses_replays(
    client: AsyncClient, auth_headers: dict, notification_engine, fake_clock
):
    await client.post("/api/v1/notifications/test", headers=auth_headers)
    fake_clock.now += 1
    await client.post("/api/v1/notifications/test", headers=auth_headers)

    response = await client.post("/api/v1/notifications/clear", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["notifications"] == []
    assert response.json()["notice"]["title"] == "Notificações limpas"
    assert len(notification_engine.dismissed_ids) == 2


async def test_requires_login(client: AsyncClient, engine):
    response = await client.get("/api/v1/notifications")
    assert response.status_code == 401


async def test_engine_not_ready(app: FastAPI, client: AsyncClient, auth_headers: dict):
    app.state.notification_engine = None

    response = await client.get("/api/v1/notifications", headers=auth_headers)

    assert response.status_code == 503
    assert response.json()["detail"] == "notification store client not initialized"
