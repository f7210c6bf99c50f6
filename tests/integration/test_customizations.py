"""Integration tests for customization requests."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.painel.models import EM_CUSTOMIZACAO, ProjectStatus
from src.painel.repositories import ProjectRepository
from tests.factories import CustomizationFactory, ProjectFactory, utc_now

pytestmark = pytest.mark.integration


@pytest.fixture
async def project(db_session: AsyncSession):
    row = ProjectFactory.build(status=ProjectStatus.SITE_PRONTO.value)
    db_session.add(row)
    await db_session.commit()
    return row


async def test_create_moves_project_to_customization(
    client: AsyncClient, auth_headers: dict, project
):
    response = await client.post(
        f"/api/v1/projects/{project.id}/customizations",
        headers=auth_headers,
        json={"description": "  Trocar o banner da página inicial  ", "priority": "Alta"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["description"] == "Trocar o banner da página inicial"
    assert body["status"] == "Solicitado"
    assert body["priority"] == "Alta"
    assert body["completed_at"] is None

    stored = await client.get(f"/api/v1/projects/{project.id}", headers=auth_headers)
    assert stored.json()["status"] == EM_CUSTOMIZACAO

    notifications = await client.get("/api/v1/notifications", headers=auth_headers)
    assert len(notifications.json()["items"]) == 1


async def test_second_request_keeps_status_without_new_notification(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession
):
    project = ProjectFactory.build(status=EM_CUSTOMIZACAO)
    db_session.add(project)
    await db_session.commit()

    response = await client.post(
        f"/api/v1/projects/{project.id}/customizations",
        headers=auth_headers,
        json={"description": "Ajustar rodapé"},
    )

    assert response.status_code == 201
    notifications = await client.get("/api/v1/notifications", headers=auth_headers)
    assert notifications.json()["items"] == []


async def test_failed_status_move_keeps_request(
    client: AsyncClient,
    auth_headers: dict,
    db_session: AsyncSession,
    monkeypatch: pytest.MonkeyPatch,
):
    project = ProjectFactory.build(status=ProjectStatus.RECEBIDO.value)
    db_session.add(project)
    await db_session.commit()

    async def broken_update_status(self, *args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(ProjectRepository, "update_status", broken_update_status)

    response = await client.post(
        f"/api/v1/projects/{project.id}/customizations",
        headers=auth_headers,
        json={"description": "Add dark mode", "priority": "Alta"},
    )

    assert response.status_code == 201
    assert response.json()["description"] == "Add dark mode"
    assert response.json()["status"] == "Solicitado"

    stored = await client.get(f"/api/v1/projects/{project.id}", headers=auth_headers)
    assert stored.json()["status"] == ProjectStatus.RECEBIDO.value
    listed = await client.get(
        f"/api/v1/projects/{project.id}/customizations", headers=auth_headers
    )
    assert [c["description"] for c in listed.json()] == ["Add dark mode"]


async def test_short_description_rejected(client: AsyncClient, auth_headers: dict, project):
    response = await client.post(
        f"/api/v1/projects/{project.id}/customizations",
        headers=auth_headers,
        json={"description": " abc "},
    )
    assert response.status_code == 422


async def test_missing_project(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/projects/00000000-0000-0000-0000-000000000000/customizations",
        headers=auth_headers,
        json={"description": "Trocar o banner"},
    )
    assert response.status_code == 404


async def test_list_most_recent_first(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, project
):
    older = CustomizationFactory.build(
        project_id=project.id, description="Primeiro pedido", requested_at=utc_now()
    )
    newer = CustomizationFactory.build(
        project_id=project.id, description="Segundo pedido", requested_at=utc_now()
    )
    db_session.add_all([older, newer])
    await db_session.commit()

    response = await client.get(
        f"/api/v1/projects/{project.id}/customizations", headers=auth_headers
    )

    assert [c["description"] for c in response.json()] == ["Segundo pedido", "Primeiro pedido"]


async def test_completion_stamps_once(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, project
):
    customization = CustomizationFactory.build(project_id=project.id)
    db_session.add(customization)
    await db_session.commit()
    url = f"/api/v1/customizations/{customization.id}"

    done = await client.patch(url, headers=auth_headers, json={"status": "Concluído"})
    again = await client.patch(url, headers=auth_headers, json={"status": "Concluído"})
    reopened = await client.patch(url, headers=auth_headers, json={"status": "Em andamento"})

    assert done.json()["completed_at"] is not None
    assert again.json()["completed_at"] == done.json()["completed_at"]
    assert reopened.json()["status"] == "Em andamento"
    assert reopened.json()["completed_at"] == done.json()["completed_at"]


async def test_explicit_completion_date(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, project
):
    customization = CustomizationFactory.build(project_id=project.id)
    db_session.add(customization)
    await db_session.commit()

    response = await client.patch(
        f"/api/v1/customizations/{customization.id}",
        headers=auth_headers,
        json={"status": "Concluído", "completed_at": "2024-05-01T15:00:00Z"},
    )

    assert response.json()["completed_at"] == "2024-05-01T15:00:00"


async def test_delete(client: AsyncClient, auth_headers: dict, db_session: AsyncSession, project):
    customization = CustomizationFactory.build(project_id=project.id)
    db_session.add(customization)
    await db_session.commit()
    url = f"/api/v1/customizations/{customization.id}"

    assert (await client.delete(url, headers=auth_headers)).status_code == 204
    assert (await client.delete(url, headers=auth_headers)).status_code == 404
