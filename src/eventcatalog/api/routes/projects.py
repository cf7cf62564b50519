"""Project routes, including architecture import, validation and export."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.config import settings
from eventcatalog.dependencies import CurrentUser, TraceId, get_db
from eventcatalog.errors.exceptions import ConflictError, ImportValidationError, NotFoundError
from eventcatalog.logging_config import bind_request_context
from eventcatalog.models.common import InfoResponse
from eventcatalog.models.imports import ExportResponse, ImportRequest, ImportResponse
from eventcatalog.models.project import ProjectCreate, ProjectResponse
from eventcatalog.repositories.project_repo import ProjectRepository
from eventcatalog.services.id_generator import generate_id
from eventcatalog.services.imports.document import dump_document, parse_document
from eventcatalog.services.imports.exporter import ProjectExporter
from eventcatalog.services.imports.materializer import ImportMaterializer
from eventcatalog.services.imports.validator import ImportValidator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"])


async def _ensure_project_exists(project_id: str, db: AsyncSession):
    row = await ProjectRepository(db).get_active(project_id)
    if not row:
        raise NotFoundError("Project", project_id)
    return row


@router.post("/projects", response_model=ProjectResponse, status_code=201)
async def create_project(body: ProjectCreate, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    repo = ProjectRepository(db)
    if await repo.name_exists(body.name):
        raise ConflictError(f"Project name '{body.name}' is already in use")

    row = await repo.create(
        project_id=generate_id("proj_"),
        name=body.name,
        description=body.description,
        is_private=body.is_private,
        created_by_type="user",
        created_by=user["sub"],
    )
    await db.commit()
    return ProjectResponse.model_validate(row)


@router.get("/projects", response_model=list[ProjectResponse])
async def list_projects(user: CurrentUser, db: AsyncSession = Depends(get_db)):
    rows = await ProjectRepository(db).list_active()
    return [ProjectResponse.model_validate(r) for r in rows]


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    row = await _ensure_project_exists(project_id, db)
    return ProjectResponse.model_validate(row)


# ── Imports ────────────────────────────────────────────────────────────────────

@router.post("/projects/{project_id}/imports/validator", response_model=InfoResponse)
async def validate_import(
    project_id: str,
    body: ImportRequest,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Validate an import document without writing anything."""
    await _ensure_project_exists(project_id, db)
    document = parse_document(body.yaml)

    errors = await ImportValidator(db).validate(document, project_id)
    if errors:
        raise ImportValidationError(errors)
    return InfoResponse(message="Document is valid")


@router.post("/projects/{project_id}/imports", response_model=ImportResponse)
async def import_project(
    project_id: str,
    body: ImportRequest,
    user: CurrentUser,
    trace_id: TraceId,
    db: AsyncSession = Depends(get_db),
):
    """Validate an import document and create every entity it declares."""
    await _ensure_project_exists(project_id, db)
    bind_request_context(trace_id, user_id=user["sub"], project_id=project_id)
    document = parse_document(body.yaml)

    errors = await ImportValidator(db).validate(document, project_id)
    if errors:
        raise ImportValidationError(errors)

    materializer = ImportMaterializer(db, atomic=settings.atomic_imports)
    created = await materializer.materialize(document, project_id, user["sub"])
    return ImportResponse(message="Import completed successfully", created=created)


@router.get("/projects/{project_id}/exports", response_model=ExportResponse)
async def export_project(project_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    """Return the project's architecture as an import document."""
    await _ensure_project_exists(project_id, db)
    document = await ProjectExporter(db).export(project_id)
    return ExportResponse(yaml=dump_document(document), document=document)
