"""Message repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.db.models.message import MessageRow
from eventcatalog.repositories.base import ScopedNameRepository


class MessageRepository(ScopedNameRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, MessageRow)
