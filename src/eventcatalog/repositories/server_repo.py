"""Server, resource and resource binding repositories."""

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.db.models.server import ResourceBindingRow, ResourceRow, ServerRow
from eventcatalog.repositories.base import BaseRepository, ScopedNameRepository


class ServerRepository(ScopedNameRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ServerRow)


class ResourceRepository(ScopedNameRepository):
    scope_field = "server_id"

    def __init__(self, session: AsyncSession):
        super().__init__(session, ResourceRow)


class ResourceBindingRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ResourceBindingRow)

    async def exists(self, resource_a: str, resource_b: str) -> bool:
        """True when a binding joins the two resources, in either direction."""
        stmt = select(ResourceBindingRow.binding_id).where(
            or_(
                and_(
                    ResourceBindingRow.source_resource_id == resource_a,
                    ResourceBindingRow.target_resource_id == resource_b,
                ),
                and_(
                    ResourceBindingRow.source_resource_id == resource_b,
                    ResourceBindingRow.target_resource_id == resource_a,
                ),
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def list_for_resources(self, resource_ids: list[str]) -> list[ResourceBindingRow]:
        """Bindings touching any of the resources, each returned once."""
        if not resource_ids:
            return []
        stmt = (
            select(ResourceBindingRow)
            .where(
                or_(
                    ResourceBindingRow.source_resource_id.in_(resource_ids),
                    ResourceBindingRow.target_resource_id.in_(resource_ids),
                )
            )
            .order_by(ResourceBindingRow.created_at, ResourceBindingRow.binding_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
