"""Pydantic models for the Message entity."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=45, pattern=r"^[A-Za-z0-9_]+$")
    description: str = Field("", max_length=5000)
    schema_id: str = Field(..., min_length=1)
    schema_version: int = Field(..., ge=1)


class MessageResponse(BaseModel):
    message_id: str
    project_id: str
    name: str
    description: str
    schema_id: str
    schema_version: int
    created_by: str
    created_at: datetime

    model_config = {"from_attributes": True}
