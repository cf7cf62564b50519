"""App and app-resource-message link repositories."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.db.base import STATUS_ACTIVE
from eventcatalog.db.models.app import AppResourceMessageRow, AppRow
from eventcatalog.repositories.base import BaseRepository, ScopedNameRepository


class AppRepository(ScopedNameRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, AppRow)


class AppResourceMessageRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, AppResourceMessageRow)

    async def exists(self, app_id: str, resource_id: str, message_id: str, direction: str) -> bool:
        stmt = select(AppResourceMessageRow.link_id).where(
            AppResourceMessageRow.app_id == app_id,
            AppResourceMessageRow.resource_id == resource_id,
            AppResourceMessageRow.message_id == message_id,
            AppResourceMessageRow.direction == direction,
            AppResourceMessageRow.status == STATUS_ACTIVE,
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def list_for_app(self, app_id: str) -> list[AppResourceMessageRow]:
        stmt = (
            select(AppResourceMessageRow)
            .where(
                AppResourceMessageRow.app_id == app_id,
                AppResourceMessageRow.status == STATUS_ACTIVE,
            )
            .order_by(AppResourceMessageRow.created_at, AppResourceMessageRow.link_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
