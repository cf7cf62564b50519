"""Server, resource and resource binding routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.dependencies import CurrentUser, get_db
from eventcatalog.errors.exceptions import ConflictError, NotFoundError, ValidationError
from eventcatalog.models.server import (
    BindingCreate,
    BindingResponse,
    ResourceCreate,
    ResourceResponse,
    ServerCreate,
    ServerResponse,
)
from eventcatalog.repositories.project_repo import ProjectRepository
from eventcatalog.repositories.server_repo import (
    ResourceBindingRepository,
    ResourceRepository,
    ServerRepository,
)
from eventcatalog.services.id_generator import generate_id

router = APIRouter(tags=["Servers"])


async def _ensure_project_exists(project_id: str, db: AsyncSession):
    row = await ProjectRepository(db).get_active(project_id)
    if not row:
        raise NotFoundError("Project", project_id)
    return row


async def _ensure_server_exists(server_id: str, db: AsyncSession):
    row = await ServerRepository(db).get(server_id)
    if not row:
        raise NotFoundError("Server", server_id)
    return row


@router.post("/projects/{project_id}/servers", response_model=ServerResponse, status_code=201)
async def create_server(
    project_id: str,
    body: ServerCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    await _ensure_project_exists(project_id, db)
    repo = ServerRepository(db)
    if await repo.name_exists(project_id, body.name):
        raise ConflictError(f"Server name '{body.name}' already exists in the project")

    row = await repo.create(
        server_id=generate_id("srv_"),
        project_id=project_id,
        name=body.name,
        description=body.description,
        protocol=body.protocol,
        created_by=user["sub"],
    )
    await db.commit()
    return ServerResponse.model_validate(row)


@router.get("/projects/{project_id}/servers", response_model=list[ServerResponse])
async def list_servers(project_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    await _ensure_project_exists(project_id, db)
    rows = await ServerRepository(db).list_active(project_id)
    return [ServerResponse.model_validate(r) for r in rows]


# ── Resources ──────────────────────────────────────────────────────────────────

@router.post("/servers/{server_id}/resources", response_model=ResourceResponse, status_code=201)
async def create_resource(
    server_id: str,
    body: ResourceCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    server = await _ensure_server_exists(server_id, db)
    repo = ResourceRepository(db)
    if await repo.name_exists(server_id, body.name):
        raise ConflictError(f"Resource name '{body.name}' already exists on server '{server.name}'")

    row = await repo.create(
        resource_id=generate_id("res_"),
        server_id=server_id,
        project_id=server.project_id,
        name=body.name,
        mode=body.mode,
        resource_type=body.resource_type,
        description=body.description,
        created_by=user["sub"],
    )
    await db.commit()
    return ResourceResponse.model_validate(row)


@router.get("/servers/{server_id}/resources", response_model=list[ResourceResponse])
async def list_resources(server_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    await _ensure_server_exists(server_id, db)
    rows = await ResourceRepository(db).list_active(server_id)
    return [ResourceResponse.model_validate(r) for r in rows]


# ── Binds ──────────────────────────────────────────────────────────────────────

@router.post("/servers/{server_id}/binds", response_model=BindingResponse, status_code=201)
async def create_binding(
    server_id: str,
    body: BindingCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    await _ensure_server_exists(server_id, db)
    resources = ResourceRepository(db)
    source = await resources.get(body.source_resource_id)
    if not source:
        raise NotFoundError("Resource", body.source_resource_id)
    target = await resources.get(body.target_resource_id)
    if not target:
        raise NotFoundError("Resource", body.target_resource_id)

    if source.server_id != server_id or target.server_id != server_id:
        raise ValidationError("Both resources of a binding must belong to this server")

    repo = ResourceBindingRepository(db)
    if await repo.exists(source.resource_id, target.resource_id):
        raise ConflictError("Binding between these resources already exists")

    row = await repo.create(
        binding_id=generate_id("bind_"),
        source_resource_id=source.resource_id,
        target_resource_id=target.resource_id,
    )
    await db.commit()
    return BindingResponse.model_validate(row)


@router.get("/servers/{server_id}/binds", response_model=list[BindingResponse])
async def list_bindings(server_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    await _ensure_server_exists(server_id, db)
    resource_ids = [r.resource_id for r in await ResourceRepository(db).list_active(server_id)]
    rows = await ResourceBindingRepository(db).list_for_resources(resource_ids)
    return [BindingResponse.model_validate(r) for r in rows]
