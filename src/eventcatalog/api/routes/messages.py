"""Message routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.dependencies import CurrentUser, get_db
from eventcatalog.errors.exceptions import ConflictError, NotFoundError, ValidationError
from eventcatalog.models.message import MessageCreate, MessageResponse
from eventcatalog.repositories.message_repo import MessageRepository
from eventcatalog.repositories.project_repo import ProjectRepository
from eventcatalog.repositories.schema_repo import SchemaRepository
from eventcatalog.services.id_generator import generate_id

router = APIRouter(tags=["Messages"])


async def _ensure_project_exists(project_id: str, db: AsyncSession):
    row = await ProjectRepository(db).get_active(project_id)
    if not row:
        raise NotFoundError("Project", project_id)
    return row


@router.post("/projects/{project_id}/messages", response_model=MessageResponse, status_code=201)
async def create_message(
    project_id: str,
    body: MessageCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    await _ensure_project_exists(project_id, db)

    schemas = SchemaRepository(db)
    schema = await schemas.get(body.schema_id)
    if not schema:
        raise NotFoundError("Schema", body.schema_id)
    if schema.project_id != project_id:
        raise ValidationError(f"Schema '{body.schema_id}' does not belong to project '{project_id}'")
    if not await schemas.version_exists(body.schema_id, body.schema_version):
        raise ValidationError(
            f"Schema '{body.schema_id}' has no version {body.schema_version}",
            {"latest_version": schema.version},
        )

    repo = MessageRepository(db)
    if await repo.name_exists(project_id, body.name):
        raise ConflictError(f"Message name '{body.name}' already exists in the project")

    row = await repo.create(
        message_id=generate_id("msg_"),
        project_id=project_id,
        name=body.name,
        description=body.description,
        schema_id=body.schema_id,
        schema_version=body.schema_version,
        created_by=user["sub"],
    )
    await db.commit()
    return MessageResponse.model_validate(row)


@router.get("/projects/{project_id}/messages", response_model=list[MessageResponse])
async def list_messages(project_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    await _ensure_project_exists(project_id, db)
    rows = await MessageRepository(db).list_active(project_id)
    return [MessageResponse.model_validate(r) for r in rows]
