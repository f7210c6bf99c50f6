from fastapi import APIRouter

from src.painel.api.v1 import (
    auth,
    board,
    customizations,
    model_templates,
    notifications,
    personalizations,
    projects,
    public,
    users,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(board.router)
api_router.include_router(customizations.router)
api_router.include_router(personalizations.router)
api_router.include_router(model_templates.router)
api_router.include_router(notifications.router)

# The share links point at /formulario/{modelo}, outside the versioned prefix
public_router = APIRouter()
public_router.include_router(public.router)
