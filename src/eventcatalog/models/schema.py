"""Pydantic models for schemas and their version history."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from eventcatalog.models.enums import SchemaType


class SchemaCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=45, pattern=r"^[A-Za-z0-9_]+$")
    description: str = Field("", max_length=5000)
    type: SchemaType = SchemaType.JSONSCHEMA
    schema_text: str = Field(..., min_length=1, alias="schema")


class SchemaUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_text: str = Field(..., min_length=1, alias="schema")


class SchemaResponse(BaseModel):
    schema_id: str
    project_id: str
    name: str
    description: str
    schema_type: SchemaType
    schema_text: str
    version: int
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SchemaVersionResponse(BaseModel):
    schema_version_id: str
    schema_id: str
    version: int
    schema_text: str
    created_by: str
    created_at: datetime

    model_config = {"from_attributes": True}
