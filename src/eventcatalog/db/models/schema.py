"""Schema and schema version tables."""

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from eventcatalog.db.base import STATUS_ACTIVE, Base, TimestampMixin


class SchemaRow(Base, TimestampMixin):
    __tablename__ = "schemas"

    schema_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("projects.project_id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(45), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    schema_type: Mapped[str] = mapped_column(String(30), nullable=False, default="jsonschema")
    schema_text: Mapped[str] = mapped_column(Text, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default=STATUS_ACTIVE)
    created_by_type: Mapped[str] = mapped_column(String(30), nullable=False, default="user")
    created_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)

    __table_args__ = (
        Index(
            "uq_schemas_project_name_active",
            "project_id",
            "name",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )


class SchemaVersionRow(Base, TimestampMixin):
    """Immutable history row; one per schema version, version 1 included."""

    __tablename__ = "schema_versions"

    schema_version_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    schema_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("schemas.schema_id"), nullable=False, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    schema_text: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("schema_id", "version", name="uq_schema_versions_schema_version"),
    )
