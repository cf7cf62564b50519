"""App routes and the send/receive usage matrix."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.dependencies import CurrentUser, get_db
from eventcatalog.errors.exceptions import ConflictError, NotFoundError, ValidationError
from eventcatalog.models.app import (
    AppCreate,
    AppResponse,
    UsageCreate,
    UsageEntry,
    UsageLinkResponse,
    UsageMatrix,
)
from eventcatalog.models.enums import Direction
from eventcatalog.repositories.app_repo import AppRepository, AppResourceMessageRepository
from eventcatalog.repositories.message_repo import MessageRepository
from eventcatalog.repositories.project_repo import ProjectRepository
from eventcatalog.repositories.server_repo import ResourceRepository, ServerRepository
from eventcatalog.services.id_generator import generate_id
from eventcatalog.services.resource_uri import format_resource_reference

router = APIRouter(tags=["Apps"])


async def _ensure_project_exists(project_id: str, db: AsyncSession):
    row = await ProjectRepository(db).get_active(project_id)
    if not row:
        raise NotFoundError("Project", project_id)
    return row


async def _ensure_app_exists(app_id: str, db: AsyncSession):
    row = await AppRepository(db).get(app_id)
    if not row:
        raise NotFoundError("App", app_id)
    return row


@router.post("/projects/{project_id}/apps", response_model=AppResponse, status_code=201)
async def create_project_app(
    project_id: str,
    body: AppCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    await _ensure_project_exists(project_id, db)
    repo = AppRepository(db)
    if await repo.name_exists(project_id, body.name):
        raise ConflictError(f"App name '{body.name}' already exists in the project")

    row = await repo.create(
        app_id=generate_id("app_"),
        project_id=project_id,
        name=body.name,
        description=body.description,
        created_by=user["sub"],
    )
    await db.commit()
    return AppResponse.model_validate(row)


@router.get("/projects/{project_id}/apps", response_model=list[AppResponse])
async def list_apps(project_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    await _ensure_project_exists(project_id, db)
    rows = await AppRepository(db).list_active(project_id)
    return [AppResponse.model_validate(r) for r in rows]


@router.get("/apps/{app_id}/usage", response_model=UsageMatrix)
async def get_app_usage(app_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    """Return what the app sends and receives, and through which resources."""
    await _ensure_app_exists(app_id, db)
    messages = MessageRepository(db)
    resources = ResourceRepository(db)
    servers = ServerRepository(db)

    matrix = UsageMatrix(app_id=app_id)
    for link in await AppResourceMessageRepository(db).list_for_app(app_id):
        message = await messages.get(link.message_id)
        resource = await resources.get(link.resource_id)
        if not message or not resource:
            continue
        server = await servers.get(resource.server_id)
        entry = UsageEntry(
            link_id=link.link_id,
            message_id=message.message_id,
            message=message.name,
            schema_id=message.schema_id,
            schema_version=message.schema_version,
            resource_id=resource.resource_id,
            resource=resource.name,
            server_id=server.server_id,
            server=server.name,
            resource_reference=format_resource_reference(
                server.protocol, server.name, resource.mode, resource.resource_type, resource.name
            ),
        )
        if link.direction == Direction.SENDS:
            matrix.sends.append(entry)
        else:
            matrix.receives.append(entry)
    return matrix


@router.post("/apps/{app_id}/usage", response_model=UsageLinkResponse, status_code=201)
async def create_app_usage(
    app_id: str,
    body: UsageCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Record that the app sends or receives a message through a resource."""
    app = await _ensure_app_exists(app_id, db)

    message = await MessageRepository(db).get(body.message_id)
    if not message:
        raise NotFoundError("Message", body.message_id)
    resource = await ResourceRepository(db).get(body.resource_id)
    if not resource:
        raise NotFoundError("Resource", body.resource_id)
    if message.project_id != app.project_id or resource.project_id != app.project_id:
        raise ValidationError("Message and resource must belong to the app's project")

    repo = AppResourceMessageRepository(db)
    if await repo.exists(app_id, body.resource_id, body.message_id, body.direction):
        raise ConflictError("App already uses this message through this resource in that direction")

    row = await repo.create(
        link_id=generate_id("arm_"),
        app_id=app_id,
        resource_id=body.resource_id,
        message_id=body.message_id,
        direction=body.direction,
        created_by=user["sub"],
    )
    await db.commit()
    return UsageLinkResponse.model_validate(row)
