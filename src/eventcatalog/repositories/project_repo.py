"""Project repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.db.base import STATUS_ACTIVE
from eventcatalog.db.models.project import ProjectRow
from eventcatalog.repositories.base import BaseRepository


class ProjectRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ProjectRow)

    async def get_active(self, project_id: str) -> ProjectRow | None:
        row = await self.get(project_id)
        if row is None or row.status != STATUS_ACTIVE:
            return None
        return row

    async def name_exists(self, name: str) -> bool:
        stmt = select(ProjectRow.project_id).where(
            ProjectRow.name == name,
            ProjectRow.status == STATUS_ACTIVE,
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def list_active(self) -> list[ProjectRow]:
        stmt = (
            select(ProjectRow)
            .where(ProjectRow.status == STATUS_ACTIVE)
            .order_by(ProjectRow.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
