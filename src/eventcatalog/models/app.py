"""Pydantic models for apps and their send/receive usage."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from eventcatalog.models.enums import Direction


class AppCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=45, pattern=r"^[A-Za-z0-9_.]+$")
    description: str = Field("", max_length=5000)


class AppResponse(BaseModel):
    app_id: str
    project_id: str
    name: str
    description: str
    created_by: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UsageCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    direction: Direction
    message_id: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)


class UsageLinkResponse(BaseModel):
    link_id: str
    app_id: str
    resource_id: str
    message_id: str
    direction: Direction
    created_at: datetime

    model_config = {"from_attributes": True}


class UsageEntry(BaseModel):
    """One send or receive of an app, with the names needed to read it."""

    link_id: str
    message_id: str
    message: str
    schema_id: str
    schema_version: int
    resource_id: str
    resource: str
    server_id: str
    server: str
    resource_reference: str


class UsageMatrix(BaseModel):
    app_id: str
    sends: list[UsageEntry] = Field(default_factory=list)
    receives: list[UsageEntry] = Field(default_factory=list)
