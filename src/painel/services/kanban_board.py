"""Kanban board: pipeline columns and status moves reconciled into a local snapshot.

A move is refused while another one holds the transition guard. A successful
move replaces only the moved record's status in the snapshot; a failed move
leaves the snapshot untouched and is never retried. The guard and the drag
marker are always released when the move finishes.
"""

from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Literal
from uuid import UUID

from src.painel.core.exceptions import TransitionInProgressError
from src.painel.core.logging import get_logger
from src.painel.schemas.common import Notice, error_notice
from src.painel.schemas.project import ProjectRead
from src.painel.services.status_registry import STATUS_OPTIONS, StatusOption

logger = get_logger(__name__)

SHORTCUT_LABEL_LENGTH = 10

SUCCESS_TITLE = "Status atualizado"
ERROR_TITLE = "Erro ao atualizar status"
ERROR_DESCRIPTION = "Não foi possível atualizar o status do projeto."

StatusUpdater = Callable[[UUID, str, str | None], Awaitable[Any]]


class TransitionGuard:
    """Advisory "updating" flag shared by every board in the process."""

    def __init__(self) -> None:
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    @contextmanager
    def hold(self) -> Iterator[None]:
        if self._busy:
            raise TransitionInProgressError("A status update is already in progress")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False


_guard: TransitionGuard | None = None


def get_transition_guard() -> TransitionGuard:
    global _guard
    if _guard is None:
        _guard = TransitionGuard()
    return _guard


@dataclass
class BoardColumn:
    status: StatusOption
    projects: list[ProjectRead] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.projects)


@dataclass(frozen=True)
class StatusShortcut:
    status: str
    label: str
    color: str


@dataclass
class MoveOutcome:
    applied: bool
    project: ProjectRead | None = None
    notice: Notice | None = None
    error: Exception | None = None


def shortcut_label(status: str) -> str:
    if len(status) > SHORTCUT_LABEL_LENGTH:
        return f"{status[:SHORTCUT_LABEL_LENGTH]}..."
    return status


class KanbanBoard:
    def __init__(
        self,
        projects: list[ProjectRead],
        updater: StatusUpdater,
        guard: TransitionGuard | None = None,
    ) -> None:
        self.projects = list(projects)
        self._updater = updater
        self.guard = guard or get_transition_guard()
        self.dragging_id: UUID | None = None

    def find(self, project_id: UUID) -> ProjectRead | None:
        return next((p for p in self.projects if p.id == project_id), None)

    def columns(self) -> list[BoardColumn]:
        """One column per pipeline status. Off-pipeline projects appear in none."""
        return [
            BoardColumn(option, [p for p in self.projects if p.status == option.value])
            for option in STATUS_OPTIONS
        ]

    def status_shortcuts(self, project: ProjectRead) -> list[StatusShortcut]:
        return [
            StatusShortcut(option.value, shortcut_label(option.value), option.color)
            for option in STATUS_OPTIONS
            if option.value != project.status
        ]

    def start_drag(self, project_id: UUID) -> None:
        self.dragging_id = project_id

    async def drop(self, new_status: str, expected_status: str | None = None) -> MoveOutcome:
        """Finish a drag onto the column of new_status."""
        project_id = self.dragging_id
        if project_id is None:
            return MoveOutcome(applied=False)

        current = self.find(project_id)
        if current is not None and current.status == new_status:
            self.dragging_id = None
            return MoveOutcome(applied=False, project=current)

        try:
            return await self._move(project_id, new_status, expected_status, source="drag")
        finally:
            self.dragging_id = None

    async def change_status(
        self,
        project_id: UUID,
        new_status: str,
        expected_status: str | None = None,
    ) -> MoveOutcome:
        """Move through a card shortcut button."""
        return await self._move(project_id, new_status, expected_status, source="button")

    async def _move(
        self,
        project_id: UUID,
        new_status: str,
        expected_status: str | None,
        source: Literal["drag", "button"],
    ) -> MoveOutcome:
        with self.guard.hold():
            try:
                await self._updater(project_id, new_status, expected_status)
            except Exception as e:
                logger.error(
                    "Error updating project status",
                    project_id=str(project_id),
                    new_status=new_status,
                    error=str(e),
                )
                return MoveOutcome(
                    applied=False,
                    project=self.find(project_id),
                    notice=error_notice(ERROR_TITLE, ERROR_DESCRIPTION),
                    error=e,
                )

            moved = self._reconcile(project_id, new_status)
            if source == "drag":
                description = f'Projeto movido para "{new_status}"'
            else:
                description = f'Status do projeto alterado para "{new_status}"'
            return MoveOutcome(
                applied=True,
                project=moved,
                notice=Notice(title=SUCCESS_TITLE, description=description),
            )

    def _reconcile(self, project_id: UUID, new_status: str) -> ProjectRead | None:
        for index, project in enumerate(self.projects):
            if project.id == project_id:
                self.projects[index] = project.model_copy(update={"status": new_status})
                return self.projects[index]
        return None
