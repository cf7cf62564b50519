"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from eventcatalog.db.models.user import UserRow
from eventcatalog.db.models.project import ProjectRow
from eventcatalog.db.models.server import ResourceBindingRow, ResourceRow, ServerRow
from eventcatalog.db.models.schema import SchemaRow, SchemaVersionRow
from eventcatalog.db.models.message import MessageRow
from eventcatalog.db.models.app import AppResourceMessageRow, AppRow

__all__ = [
    "UserRow",
    "ProjectRow",
    "ServerRow",
    "ResourceRow",
    "ResourceBindingRow",
    "SchemaRow",
    "SchemaVersionRow",
    "MessageRow",
    "AppRow",
    "AppResourceMessageRow",
]
