"""Kanban board endpoints."""

from fastapi import APIRouter, HTTPException, status

from src.painel.api.dependencies import BoardGuard, CurrentUser, ProjectServiceDep
from src.painel.core.exceptions import StatusConflictError, TransitionInProgressError
from src.painel.schemas.project import (
    BoardColumnRead,
    BoardRead,
    MoveResult,
    ProjectFilters,
    ProjectRead,
    StatusChangeRequest,
)
from src.painel.services.kanban_board import KanbanBoard, MoveOutcome

router = APIRouter(prefix="/board", tags=["board"])


def _raise_for_failure(outcome: MoveOutcome) -> None:
    error = outcome.error
    if error is None:
        return
    if isinstance(error, StatusConflictError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error)) from error
    if isinstance(error, LookupError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error)) from error
    raise HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=outcome.notice.description if outcome.notice else "Status update failed",
    ) from error


@router.get(
    "",
    response_model=BoardRead,
    summary="Board columns",
    description="One column per pipeline status, in pipeline order, with live counts.",
)
async def get_board(
    service: ProjectServiceDep,
    guard: BoardGuard,
    _user: CurrentUser,
) -> BoardRead:
    projects = await service.list_projects(ProjectFilters())
    board = KanbanBoard(projects, service.change_status, guard)
    return BoardRead(
        columns=[
            BoardColumnRead(
                status=column.status.value,
                color=column.status.color,
                icon=column.status.icon,
                count=column.count,
                projects=column.projects,
            )
            for column in board.columns()
        ]
    )


@router.post(
    "/moves",
    response_model=MoveResult,
    summary="Move a project",
    description=(
        "Move a project to another status by drag or by card button. Dropping a "
        "card on its own column is a no-op. With `expected_status` the move only "
        "applies if the stored status still matches."
    ),
    responses={
        200: {"description": "Move applied, or no-op for a same-column drop"},
        404: {"description": "Project not found"},
        409: {"description": "Status changed meanwhile, or another move is in progress"},
        502: {"description": "The status update failed"},
    },
)
async def move_project(
    move: StatusChangeRequest,
    service: ProjectServiceDep,
    guard: BoardGuard,
    _user: CurrentUser,
) -> MoveResult:
    try:
        project = await service.get(move.project_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    board = KanbanBoard([ProjectRead.model_validate(project)], service.change_status, guard)
    try:
        if move.source == "drag":
            board.start_drag(move.project_id)
            outcome = await board.drop(move.status.value, move.expected_status)
        else:
            outcome = await board.change_status(
                move.project_id, move.status.value, move.expected_status
            )
    except TransitionInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    _raise_for_failure(outcome)
    return MoveResult(applied=outcome.applied, project=outcome.project, notice=outcome.notice)
