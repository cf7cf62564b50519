"""Export of a project's architecture as an import document."""

from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.models.enums import Direction
from eventcatalog.models.imports import (
    AppImport,
    BindImport,
    ImportDocument,
    LinkImport,
    MessageImport,
    ResourceImport,
    SchemaImport,
    SchemaReference,
    ServerImport,
)
from eventcatalog.repositories.app_repo import AppRepository, AppResourceMessageRepository
from eventcatalog.repositories.message_repo import MessageRepository
from eventcatalog.repositories.schema_repo import SchemaRepository
from eventcatalog.repositories.server_repo import (
    ResourceBindingRepository,
    ResourceRepository,
    ServerRepository,
)
from eventcatalog.services.imports.validator import SUPPORTED_DOCUMENT_VERSION
from eventcatalog.services.resource_uri import format_resource_reference


class ProjectExporter:
    """Builds the import document that would recreate a project.

    Schemas are exported with their current text; messages keep only the
    schema name, so a re-import pins them to that text's version.
    """

    def __init__(self, session: AsyncSession):
        self.servers = ServerRepository(session)
        self.resources = ResourceRepository(session)
        self.bindings = ResourceBindingRepository(session)
        self.schemas = SchemaRepository(session)
        self.messages = MessageRepository(session)
        self.apps = AppRepository(session)
        self.links = AppResourceMessageRepository(session)

    async def export(self, project_id: str) -> ImportDocument:
        servers: list[ServerImport] = []
        references: dict[str, str] = {}

        for server in await self.servers.list_active(project_id):
            resources = await self.resources.list_active(server.server_id)
            names = {r.resource_id: r.name for r in resources}
            for r in resources:
                references[r.resource_id] = format_resource_reference(
                    server.protocol, server.name, r.mode, r.resource_type, r.name
                )
            binds = [
                BindImport(source=names[b.source_resource_id], target=names[b.target_resource_id])
                for b in await self.bindings.list_for_resources(list(names))
                if b.source_resource_id in names and b.target_resource_id in names
            ]
            servers.append(
                ServerImport(
                    name=server.name,
                    type=server.protocol,
                    description=server.description,
                    resources=[
                        ResourceImport(
                            name=r.name, mode=r.mode, type=r.resource_type, description=r.description
                        )
                        for r in resources
                    ],
                    binds=binds,
                )
            )

        schema_rows = await self.schemas.list_active(project_id)
        schema_names = {s.schema_id: s.name for s in schema_rows}
        schemas = [
            SchemaImport(
                name=s.name,
                type=s.schema_type,
                version=s.version,
                description=s.description,
                schema_text=s.schema_text,
            )
            for s in schema_rows
        ]

        message_rows = await self.messages.list_active(project_id)
        message_names = {m.message_id: m.name for m in message_rows}
        messages = [
            MessageImport(
                name=m.name,
                description=m.description,
                schema_ref=SchemaReference(name=schema_names.get(m.schema_id, "")),
            )
            for m in message_rows
        ]

        apps: list[AppImport] = []
        for app in await self.apps.list_active(project_id):
            sends: list[LinkImport] = []
            receives: list[LinkImport] = []
            for link in await self.links.list_for_app(app.app_id):
                if link.message_id not in message_names or link.resource_id not in references:
                    continue
                entry = LinkImport(
                    message=message_names[link.message_id],
                    resource=references[link.resource_id],
                )
                (sends if link.direction == Direction.SENDS else receives).append(entry)
            apps.append(
                AppImport(name=app.name, description=app.description, sends=sends, receives=receives)
            )

        return ImportDocument(
            version=SUPPORTED_DOCUMENT_VERSION,
            servers=servers,
            schemas=schemas,
            messages=messages,
            apps=apps,
        )
