"""Schema routes with append-only version history."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.dependencies import CurrentUser, get_db
from eventcatalog.errors.exceptions import (
    ConflictError,
    NotFoundError,
    SchemaCompilationError,
    ValidationError,
)
from eventcatalog.models.schema import (
    SchemaCreate,
    SchemaResponse,
    SchemaUpdate,
    SchemaVersionResponse,
)
from eventcatalog.repositories.project_repo import ProjectRepository
from eventcatalog.repositories.schema_repo import SchemaRepository
from eventcatalog.services.schema_compiler import compile_schema

router = APIRouter(tags=["Schemas"])


async def _ensure_project_exists(project_id: str, db: AsyncSession):
    row = await ProjectRepository(db).get_active(project_id)
    if not row:
        raise NotFoundError("Project", project_id)
    return row


async def _ensure_schema_exists(schema_id: str, db: AsyncSession):
    row = await SchemaRepository(db).get(schema_id)
    if not row:
        raise NotFoundError("Schema", schema_id)
    return row


def _check_schema_text(schema_text: str) -> None:
    try:
        compile_schema(schema_text, require_dialect=True)
    except SchemaCompilationError as exc:
        raise ValidationError(f"Invalid JSON schema: {exc.message}") from exc


@router.post("/projects/{project_id}/schemas", response_model=SchemaResponse, status_code=201)
async def create_schema(
    project_id: str,
    body: SchemaCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    await _ensure_project_exists(project_id, db)
    _check_schema_text(body.schema_text)

    repo = SchemaRepository(db)
    if await repo.name_exists(project_id, body.name):
        raise ConflictError(f"Schema name '{body.name}' already exists in the project")

    row = await repo.create_with_first_version(
        project_id=project_id,
        name=body.name,
        schema_text=body.schema_text,
        created_by=user["sub"],
        description=body.description,
        schema_type=body.type,
    )
    await db.commit()
    return SchemaResponse.model_validate(row)


@router.get("/projects/{project_id}/schemas", response_model=list[SchemaResponse])
async def list_schemas(project_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    await _ensure_project_exists(project_id, db)
    rows = await SchemaRepository(db).list_active(project_id)
    return [SchemaResponse.model_validate(r) for r in rows]


@router.get("/schemas/{schema_id}", response_model=SchemaResponse)
async def get_schema(schema_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    row = await _ensure_schema_exists(schema_id, db)
    return SchemaResponse.model_validate(row)


@router.put("/schemas/{schema_id}", response_model=SchemaResponse)
async def update_schema(
    schema_id: str,
    body: SchemaUpdate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Store new schema text as the next version."""
    row = await _ensure_schema_exists(schema_id, db)
    _check_schema_text(body.schema_text)

    row = await SchemaRepository(db).create_version(row, body.schema_text, user["sub"])
    await db.commit()
    return SchemaResponse.model_validate(row)


@router.get("/schemas/{schema_id}/versions", response_model=list[SchemaVersionResponse])
async def list_schema_versions(schema_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    await _ensure_schema_exists(schema_id, db)
    rows = await SchemaRepository(db).list_versions(schema_id)
    return [SchemaVersionResponse.model_validate(r) for r in rows]


@router.get("/schemas/{schema_id}/versions/{version}", response_model=SchemaVersionResponse)
async def get_schema_version(
    schema_id: str,
    version: int,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    await _ensure_schema_exists(schema_id, db)
    row = await SchemaRepository(db).get_version(schema_id, version)
    if not row:
        raise NotFoundError("Schema version", f"{schema_id}@{version}")
    return SchemaVersionResponse.model_validate(row)
