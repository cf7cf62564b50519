"""Import document structure and import/export API models.

The document models are deliberately permissive: unknown keys are ignored and
missing strings default to empty, so the validator can report every problem
instead of failing on the first one.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _DocumentModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # An empty YAML value ("description:") parses as None
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class BindImport(_DocumentModel):
    source: str = ""
    target: str = ""


class ResourceImport(_DocumentModel):
    name: str = ""
    mode: str = ""
    type: str = ""
    description: str = ""


class ServerImport(_DocumentModel):
    name: str = ""
    type: str = ""
    description: str = ""
    resources: list[ResourceImport] = Field(default_factory=list)
    binds: list[BindImport] = Field(default_factory=list)


class SchemaImport(_DocumentModel):
    name: str = ""
    type: str = ""
    version: int | None = None
    description: str = ""
    schema_text: str = Field("", alias="schema")


class SchemaReference(_DocumentModel):
    name: str = ""


class MessageImport(_DocumentModel):
    name: str = ""
    description: str = ""
    schema_ref: SchemaReference = Field(default_factory=SchemaReference, alias="schema")


class LinkImport(_DocumentModel):
    message: str = ""
    resource: str = ""


class AppImport(_DocumentModel):
    name: str = ""
    description: str = ""
    sends: list[LinkImport] = Field(default_factory=list)
    receives: list[LinkImport] = Field(default_factory=list)


class ImportDocument(_DocumentModel):
    version: int = 0
    servers: list[ServerImport] = Field(default_factory=list)
    schemas: list[SchemaImport] = Field(default_factory=list)
    messages: list[MessageImport] = Field(default_factory=list)
    apps: list[AppImport] = Field(default_factory=list)


# ── API bodies ─────────────────────────────────────────────────────────────────

class ImportRequest(BaseModel):
    yaml: str = Field(..., min_length=1)


class ImportResponse(BaseModel):
    message: str
    created: dict[str, int] = Field(default_factory=dict)


class ExportResponse(BaseModel):
    yaml: str
    document: ImportDocument
