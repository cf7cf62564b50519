"""Pydantic models for the Project entity."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=45, pattern=r"^[A-Za-z0-9]+$")
    description: str = Field("", max_length=5000)
    is_private: bool = False


class ProjectResponse(BaseModel):
    project_id: str
    name: str
    description: str
    is_private: bool
    status: str
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
