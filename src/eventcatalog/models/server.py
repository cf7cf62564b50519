"""Pydantic models for servers, resources and resource bindings."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from eventcatalog.models.enums import Protocol, ResourceMode, ResourceType


class ServerCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=45, pattern=r"^[A-Za-z0-9_.]+$")
    description: str = Field("", max_length=5000)
    protocol: Protocol


class ServerResponse(BaseModel):
    server_id: str
    project_id: str
    name: str
    description: str
    protocol: Protocol
    created_by: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ResourceCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_.-]+$")
    mode: ResourceMode
    resource_type: ResourceType
    description: str = Field("", max_length=5000)


class ResourceResponse(BaseModel):
    resource_id: str
    server_id: str
    project_id: str
    name: str
    mode: ResourceMode
    resource_type: ResourceType
    description: str
    created_by: str
    created_at: datetime

    model_config = {"from_attributes": True}


class BindingCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    source_resource_id: str = Field(..., min_length=1)
    target_resource_id: str = Field(..., min_length=1)


class BindingResponse(BaseModel):
    binding_id: str
    source_resource_id: str
    target_resource_id: str
    created_at: datetime

    model_config = {"from_attributes": True}
