"""Schema and schema version repositories."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.db.models.schema import SchemaRow, SchemaVersionRow
from eventcatalog.models.enums import SchemaType
from eventcatalog.repositories.base import ScopedNameRepository
from eventcatalog.services.id_generator import generate_id


class SchemaRepository(ScopedNameRepository):
    """Schemas keep the latest text on the row and every version in schema_versions."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, SchemaRow)

    async def create_with_first_version(
        self,
        project_id: str,
        name: str,
        schema_text: str,
        created_by: str,
        description: str = "",
        schema_type: str = SchemaType.JSONSCHEMA,
    ) -> SchemaRow:
        """Create the schema at version 1 together with its first version row.

        Both rows are flushed in the caller's transaction; committing is the
        caller's job so the pair lands or fails together.
        """
        schema = await self.create(
            schema_id=generate_id("sch_"),
            project_id=project_id,
            name=name,
            description=description,
            schema_type=schema_type,
            schema_text=schema_text,
            version=1,
            created_by=created_by,
        )
        await self._add_version(schema, created_by)
        return schema

    async def create_version(self, schema: SchemaRow, schema_text: str, created_by: str) -> SchemaRow:
        """Replace the current text and append the next version row."""
        await self.update(schema, schema_text=schema_text, version=schema.version + 1)
        await self._add_version(schema, created_by)
        return schema

    async def _add_version(self, schema: SchemaRow, created_by: str) -> SchemaVersionRow:
        row = SchemaVersionRow(
            schema_version_id=generate_id("scv_"),
            schema_id=schema.schema_id,
            version=schema.version,
            schema_text=schema.schema_text,
            created_by=created_by,
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_version(self, schema_id: str, version: int) -> SchemaVersionRow | None:
        stmt = select(SchemaVersionRow).where(
            SchemaVersionRow.schema_id == schema_id,
            SchemaVersionRow.version == version,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def version_exists(self, schema_id: str, version: int) -> bool:
        return await self.get_version(schema_id, version) is not None

    async def list_versions(self, schema_id: str) -> list[SchemaVersionRow]:
        stmt = (
            select(SchemaVersionRow)
            .where(SchemaVersionRow.schema_id == schema_id)
            .order_by(SchemaVersionRow.version)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
