"""Repository base classes.

Repositories wrap one ORM model and only ``flush``; committing belongs to the
route or service that owns the unit of work.
"""

from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.db.base import STATUS_ACTIVE, Base

T = TypeVar("T", bound=Base)


class BaseRepository:
    """Async CRUD over a single model."""

    def __init__(self, session: AsyncSession, model_class: type[T]):
        self.session = session
        self.model_class = model_class

    async def get(self, pk_value: str) -> T | None:
        return await self.session.get(self.model_class, pk_value)

    async def create(self, **values: Any) -> T:
        row = self.model_class(**values)
        self.session.add(row)
        await self.session.flush()
        return row

    async def update(self, row: T, **values: Any) -> T:
        for key, value in values.items():
            setattr(row, key, value)
        await self.session.flush()
        return row


class ScopedNameRepository(BaseRepository):
    """Entities whose name is unique among the active rows of an owner.

    ``scope_field`` is the owning column, ``project_id`` unless overridden.
    """

    scope_field = "project_id"

    def _scope(self, scope_id: str):
        return getattr(self.model_class, self.scope_field) == scope_id

    async def get_active_by_name(self, scope_id: str, name: str) -> T | None:
        stmt = select(self.model_class).where(
            self._scope(scope_id),
            self.model_class.name == name,
            self.model_class.status == STATUS_ACTIVE,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def name_exists(self, scope_id: str, name: str) -> bool:
        return await self.get_active_by_name(scope_id, name) is not None

    async def list_active(self, scope_id: str) -> list[T]:
        stmt = (
            select(self.model_class)
            .where(self._scope(scope_id), self.model_class.status == STATUS_ACTIVE)
            .order_by(self.model_class.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
