"""Tests for the kanban board: columns, shortcuts and guarded moves."""

import asyncio
from uuid import UUID

import pytest

from src.painel.core.exceptions import TransitionInProgressError
from src.painel.models.enums import EM_CUSTOMIZACAO
from src.painel.services.kanban_board import (
    ERROR_DESCRIPTION,
    ERROR_TITLE,
    KanbanBoard,
    TransitionGuard,
    get_transition_guard,
    shortcut_label,
)
from tests.factories import ProjectReadFactory

pytestmark = pytest.mark.unit


class RecordingUpdater:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[UUID, str, str | None]] = []

    async def __call__(self, project_id: UUID, status: str, expected: str | None) -> None:
        self.calls.append((project_id, status, expected))
        if self.error is not None:
            raise self.error


class TestColumns:
    def test_one_column_per_status_in_order(self):
        board = KanbanBoard([], RecordingUpdater(), TransitionGuard())
        assert [c.status.value for c in board.columns()] == [
            "Recebido",
            "Criando site",
            "Configurando Domínio",
            "Aguardando DNS",
            "Site pronto",
        ]

    def test_projects_grouped_and_counted(self):
        received = ProjectReadFactory.batch(2, status="Recebido")
        ready = ProjectReadFactory.build(status="Site pronto")
        custom = ProjectReadFactory.build(status=EM_CUSTOMIZACAO)
        board = KanbanBoard([*received, ready, custom], RecordingUpdater(), TransitionGuard())

        columns = {c.status.value: c for c in board.columns()}

        assert columns["Recebido"].count == 2
        assert columns["Site pronto"].projects == [ready]
        # Off-pipeline statuses appear in no column
        assert sum(c.count for c in columns.values()) == 3


class TestShortcuts:
    def test_shortcuts_exclude_current_status(self):
        project = ProjectReadFactory.build(status="Criando site")
        board = KanbanBoard([project], RecordingUpdater(), TransitionGuard())

        shortcuts = board.status_shortcuts(project)

        assert len(shortcuts) == 4
        assert "Criando site" not in [s.status for s in shortcuts]

    def test_off_pipeline_project_gets_all_five(self):
        project = ProjectReadFactory.build(status=EM_CUSTOMIZACAO)
        board = KanbanBoard([project], RecordingUpdater(), TransitionGuard())
        assert len(board.status_shortcuts(project)) == 5

    def test_long_labels_truncated(self):
        assert shortcut_label("Configurando Domínio") == "Configuran..."
        assert shortcut_label("Recebido") == "Recebido"
        assert shortcut_label("Site pronto") == "Site pront..."


class TestMoves:
    async def test_drop_on_other_column_moves_project(self):
        project = ProjectReadFactory.build(status="Recebido")
        updater = RecordingUpdater()
        board = KanbanBoard([project], updater, TransitionGuard())

        board.start_drag(project.id)
        outcome = await board.drop("Criando site")

        assert outcome.applied is True
        assert updater.calls == [(project.id, "Criando site", None)]
        assert board.find(project.id).status == "Criando site"
        assert outcome.notice.title == "Status atualizado"
        assert outcome.notice.description == 'Projeto movido para "Criando site"'
        assert board.dragging_id is None

    async def test_drop_on_same_column_is_noop(self):
        project = ProjectReadFactory.build(status="Aguardando DNS")
        updater = RecordingUpdater()
        board = KanbanBoard([project], updater, TransitionGuard())

        board.start_drag(project.id)
        outcome = await board.drop("Aguardando DNS")

        assert outcome.applied is False
        assert outcome.notice is None
        assert updater.calls == []
        assert board.dragging_id is None

    async def test_drop_without_drag_does_nothing(self):
        updater = RecordingUpdater()
        board = KanbanBoard([], updater, TransitionGuard())
        outcome = await board.drop("Recebido")
        assert outcome.applied is False
        assert updater.calls == []

    async def test_button_move_uses_button_message(self):
        project = ProjectReadFactory.build(status="Recebido")
        board = KanbanBoard([project], RecordingUpdater(), TransitionGuard())

        outcome = await board.change_status(project.id, "Site pronto", "Recebido")

        assert outcome.applied is True
        assert outcome.notice.description == 'Status do projeto alterado para "Site pronto"'

    async def test_failed_move_leaves_snapshot_and_reports(self):
        project = ProjectReadFactory.build(status="Recebido")
        error = RuntimeError("timeout")
        updater = RecordingUpdater(error=error)
        guard = TransitionGuard()
        board = KanbanBoard([project], updater, guard)

        board.start_drag(project.id)
        outcome = await board.drop("Site pronto")

        assert outcome.applied is False
        assert outcome.error is error
        assert outcome.notice.title == ERROR_TITLE
        assert outcome.notice.description == ERROR_DESCRIPTION
        assert board.find(project.id).status == "Recebido"
        # Not retried, and both markers released
        assert len(updater.calls) == 1
        assert guard.busy is False
        assert board.dragging_id is None

    async def test_only_moved_project_changes(self):
        moved, other = ProjectReadFactory.batch(2, status="Recebido")
        board = KanbanBoard([moved, other], RecordingUpdater(), TransitionGuard())

        await board.change_status(moved.id, "Criando site")

        assert board.find(other.id) == other
        assert board.find(moved.id).client_name == moved.client_name


class TestTransitionGuard:
    async def test_second_move_refused_while_first_in_flight(self):
        gate = asyncio.Event()
        calls: list[str] = []

        async def slow_updater(project_id, status, expected):
            calls.append(status)
            await gate.wait()

        guard = TransitionGuard()
        first, second = ProjectReadFactory.batch(2, status="Recebido")
        board_a = KanbanBoard([first], slow_updater, guard)
        board_b = KanbanBoard([second], slow_updater, guard)

        task = asyncio.create_task(board_a.change_status(first.id, "Criando site"))
        await asyncio.sleep(0)
        assert guard.busy is True

        with pytest.raises(TransitionInProgressError):
            await board_b.change_status(second.id, "Site pronto")

        gate.set()
        outcome = await task
        assert outcome.applied is True
        assert calls == ["Criando site"]
        assert guard.busy is False

    def test_guard_is_process_wide(self):
        assert get_transition_guard() is get_transition_guard()
        board = KanbanBoard([], RecordingUpdater())
        assert board.guard is get_transition_guard()
