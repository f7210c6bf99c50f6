"""Integration tests for kanban board moves and the notifications they raise."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.painel.models import EM_CUSTOMIZACAO, ProjectStatus
from tests.factories import ProjectFactory

pytestmark = pytest.mark.integration


@pytest.fixture
async def project(db_session: AsyncSession):
    row = ProjectFactory.build(client_name="Padaria Central")
    db_session.add(row)
    await db_session.commit()
    return row


async def test_board_columns(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, project
):
    db_session.add(ProjectFactory.build(status=ProjectStatus.SITE_PRONTO.value))
    db_session.add(ProjectFactory.build(status=EM_CUSTOMIZACAO))
    await db_session.commit()

    response = await client.get("/api/v1/board", headers=auth_headers)

    assert response.status_code == 200
    columns = response.json()["columns"]
    assert [c["status"] for c in columns] == [s.value for s in ProjectStatus]
    counts = {c["status"]: c["count"] for c in columns}
    assert counts["Recebido"] == 1
    assert counts["Site pronto"] == 1
    assert sum(counts.values()) == 2
    assert columns[0]["projects"][0]["id"] == str(project.id)
    assert columns[0]["color"]
    assert columns[0]["icon"]


async def test_button_move(client: AsyncClient, auth_headers: dict, project):
    response = await client.post(
        "/api/v1/board/moves",
        headers=auth_headers,
        json={"project_id": str(project.id), "status": "Criando site"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["applied"] is True
    assert body["project"]["status"] == "Criando site"
    assert body["notice"]["description"] == 'Status do projeto alterado para "Criando site"'

    stored = await client.get(f"/api/v1/projects/{project.id}", headers=auth_headers)
    assert stored.json()["status"] == "Criando site"


async def test_drag_to_same_column_is_noop(client: AsyncClient, auth_headers: dict, project):
    response = await client.post(
        "/api/v1/board/moves",
        headers=auth_headers,
        json={"project_id": str(project.id), "status": "Recebido", "source": "drag"},
    )

    assert response.status_code == 200
    assert response.json()["applied"] is False
    assert response.json()["notice"] is None

    notifications = await client.get("/api/v1/notifications", headers=auth_headers)
    assert notifications.json()["items"] == []


async def test_drag_move(client: AsyncClient, auth_headers: dict, project):
    response = await client.post(
        "/api/v1/board/moves",
        headers=auth_headers,
        json={"project_id": str(project.id), "status": "Aguardando DNS", "source": "drag"},
    )

    assert response.json()["applied"] is True
    assert response.json()["notice"]["description"] == 'Projeto movido para "Aguardando DNS"'


async def test_stale_expected_status_conflicts(
    client: AsyncClient, auth_headers: dict, project
):
    response = await client.post(
        "/api/v1/board/moves",
        headers=auth_headers,
        json={
            "project_id": str(project.id),
            "status": "Site pronto",
            "expected_status": "Criando site",
        },
    )

    assert response.status_code == 409
    stored = await client.get(f"/api/v1/projects/{project.id}", headers=auth_headers)
    assert stored.json()["status"] == "Recebido"


async def test_matching_expected_status_applies(
    client: AsyncClient, auth_headers: dict, project
):
    response = await client.post(
        "/api/v1/board/moves",
        headers=auth_headers,
        json={
            "project_id": str(project.id),
            "status": "Site pronto",
            "expected_status": "Recebido",
        },
    )
    assert response.status_code == 200
    assert response.json()["applied"] is True


async def test_unknown_status_rejected(client: AsyncClient, auth_headers: dict, project):
    response = await client.post(
        "/api/v1/board/moves",
        headers=auth_headers,
        json={"project_id": str(project.id), "status": "Publicado"},
    )
    assert response.status_code == 422


async def test_missing_project(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/board/moves",
        headers=auth_headers,
        json={"project_id": "00000000-0000-0000-0000-000000000000", "status": "Site pronto"},
    )
    assert response.status_code == 404


async def test_move_raises_one_notification(client: AsyncClient, auth_headers: dict, project):
    await client.post(
        "/api/v1/board/moves",
        headers=auth_headers,
        json={"project_id": str(project.id), "status": "Criando site"},
    )

    response = await client.get("/api/v1/notifications", headers=auth_headers)

    body = response.json()
    assert body["unread"] == 1
    [notification] = body["items"]
    assert notification["id"].startswith(f"status_{project.id}_Recebido_Criando_site_")
    assert notification["description"] == (
        'O projeto "Padaria Central" foi movido de "Recebido" para "Criando site"'
    )


async def test_project_edit_status_change_notifies(
    client: AsyncClient, auth_headers: dict, project
):
    await client.patch(
        f"/api/v1/projects/{project.id}",
        headers=auth_headers,
        json={"status": "Site pronto"},
    )

    response = await client.get("/api/v1/notifications", headers=auth_headers)
    assert len(response.json()["items"]) == 1
