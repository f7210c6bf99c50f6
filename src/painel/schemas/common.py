"""Small response pieces shared by several endpoints."""

from typing import Literal

from pydantic import BaseModel


class Notice(BaseModel):
    """A transient user-facing message (rendered as a toast by the frontend)."""

    title: str
    description: str
    variant: Literal["default", "destructive", "warning"] = "default"


def error_notice(title: str, description: str) -> Notice:
    return Notice(title=title, description=description, variant="destructive")
