"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from eventcatalog.api.routes import apps, auth, health, messages, projects, schemas, servers

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router)
api_router.include_router(projects.router)
api_router.include_router(servers.router)
api_router.include_router(schemas.router)
api_router.include_router(messages.router)
api_router.include_router(apps.router)
