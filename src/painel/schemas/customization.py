from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.painel.models.enums import CustomizationPriority, CustomizationStatus

MIN_DESCRIPTION_LENGTH = 5


class CustomizationCreate(BaseModel):
    description: str = Field(max_length=2000)
    priority: CustomizationPriority = CustomizationPriority.MEDIA
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        v = v.strip()
        if len(v) < MIN_DESCRIPTION_LENGTH:
            raise ValueError(
                "Description is required and must have at least "
                f"{MIN_DESCRIPTION_LENGTH} characters"
            )
        return v

    @field_validator("notes")
    @classmethod
    def blank_notes(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
        return v or None


class CustomizationStatusUpdate(BaseModel):
    """Any status may follow any other.

    An explicit `completed_at` is stored as given; otherwise moving to
    Concluído stamps it once.
    """

    status: CustomizationStatus
    completed_at: datetime | None = None


class CustomizationRead(BaseModel):
    id: UUID
    project_id: UUID
    description: str
    priority: str
    status: str
    requested_at: datetime
    completed_at: datetime | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
