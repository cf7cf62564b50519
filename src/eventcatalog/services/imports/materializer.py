"""Creation of catalog entities from a validated import document.

Entities are created in dependency order, servers with their resources and
binds first, then schemas, messages, and finally apps with their send/receive
wiring. Names are resolved to identifiers through maps filled by the earlier
stages.

By default every entity is committed as soon as it is created (a schema and
its first version together), so a failure part way leaves the entities created
so far in place and reports them. With ``atomic=True`` the whole document is
committed once at the end and any failure rolls everything back.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.errors.exceptions import MalformedURIError, MaterializationError
from eventcatalog.models.enums import Direction
from eventcatalog.models.imports import AppImport, ImportDocument, LinkImport, ServerImport
from eventcatalog.repositories.app_repo import AppRepository, AppResourceMessageRepository
from eventcatalog.repositories.message_repo import MessageRepository
from eventcatalog.repositories.schema_repo import SchemaRepository
from eventcatalog.repositories.server_repo import (
    ResourceBindingRepository,
    ResourceRepository,
    ServerRepository,
)
from eventcatalog.services.id_generator import generate_id
from eventcatalog.services.resource_uri import ResourceKey, parse_resource_reference

logger = logging.getLogger(__name__)

_COUNT_KEYS = {
    "server": "servers",
    "resource": "resources",
    "bind": "binds",
    "schema": "schemas",
    "message": "messages",
    "app": "apps",
    "link": "links",
}


class ImportMaterializer:
    def __init__(self, session: AsyncSession, atomic: bool = False):
        self.session = session
        self.atomic = atomic
        self.servers = ServerRepository(session)
        self.resources = ResourceRepository(session)
        self.bindings = ResourceBindingRepository(session)
        self.schemas = SchemaRepository(session)
        self.messages = MessageRepository(session)
        self.apps = AppRepository(session)
        self.links = AppResourceMessageRepository(session)

        self.created: list[dict] = []
        self._resource_ids: dict[ResourceKey, str] = {}
        self._schema_ids: dict[str, str] = {}
        self._message_ids: dict[str, str] = {}

    async def materialize(self, document: ImportDocument, project_id: str, user_id: str) -> dict[str, int]:
        """Create every entity of the document and return per-kind counts.

        Raises:
            MaterializationError: when an entity cannot be created or a name
                reference cannot be resolved. ``created`` lists what stays
                committed.
        """
        try:
            await self._create_servers(document, project_id, user_id)
            await self._create_schemas(document, project_id, user_id)
            await self._create_messages(document, project_id, user_id)
            await self._create_apps(document, project_id, user_id)
            if self.atomic:
                await self.session.commit()
        except MaterializationError as exc:
            await self.session.rollback()
            if self.atomic:
                self.created = []
            logger.warning(
                "Import into project %s failed after %d committed entities: %s",
                project_id, len(self.created), exc.message,
            )
            raise MaterializationError(exc.message, self.created) from exc
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception(
                "Storage failure during import into project %s (%d entities committed)",
                project_id, 0 if self.atomic else len(self.created),
            )
            raise

        counts = {key: 0 for key in _COUNT_KEYS.values()}
        for entity in self.created:
            counts[_COUNT_KEYS[entity["kind"]]] += 1
        logger.info("Import into project %s completed: %s", project_id, counts)
        return counts

    async def _done(self, kind: str, name: str, entity_id: str) -> None:
        if not self.atomic:
            await self.session.commit()
        self.created.append({"kind": kind, "name": name, "id": entity_id})

    # ── Stage 1: servers, resources, binds ─────────────────────────────────────

    async def _create_servers(self, document: ImportDocument, project_id: str, user_id: str) -> None:
        for server in document.servers:
            try:
                row = await self.servers.create(
                    server_id=generate_id("srv_"),
                    project_id=project_id,
                    name=server.name,
                    description=server.description,
                    protocol=server.type,
                    created_by=user_id,
                )
            except IntegrityError as exc:
                raise MaterializationError(f"failed to create server {server.name}: {exc.orig}") from exc
            await self._done("server", server.name, row.server_id)

            await self._create_resources(server, row.server_id, project_id, user_id)
            await self._create_binds(server)
        logger.info("Import stage complete: %d server(s)", len(document.servers))

    async def _create_resources(self, server: ServerImport, server_id: str, project_id: str, user_id: str) -> None:
        for resource in server.resources:
            try:
                row = await self.resources.create(
                    resource_id=generate_id("res_"),
                    server_id=server_id,
                    project_id=project_id,
                    name=resource.name,
                    mode=resource.mode,
                    resource_type=resource.type,
                    description=resource.description,
                    created_by=user_id,
                )
            except IntegrityError as exc:
                raise MaterializationError(
                    f"failed to create resource {resource.name} in server {server.name}: {exc.orig}"
                ) from exc
            self._resource_ids[ResourceKey(server.name, resource.name)] = row.resource_id
            await self._done("resource", f"{server.name}.{resource.name}", row.resource_id)

    async def _create_binds(self, server: ServerImport) -> None:
        for bind in server.binds:
            source_id = self._resource_ids.get(ResourceKey(server.name, bind.source))
            target_id = self._resource_ids.get(ResourceKey(server.name, bind.target))
            if source_id is None or target_id is None:
                logger.debug(
                    "Skipping bind %s -> %s in server %s: endpoint not imported",
                    bind.source, bind.target, server.name,
                )
                continue
            if await self.bindings.exists(source_id, target_id):
                continue
            try:
                row = await self.bindings.create(
                    binding_id=generate_id("bind_"),
                    source_resource_id=source_id,
                    target_resource_id=target_id,
                )
            except IntegrityError as exc:
                raise MaterializationError(
                    f"failed to create binding between {bind.source} and {bind.target}: {exc.orig}"
                ) from exc
            await self._done("bind", f"{server.name}.{bind.source}->{bind.target}", row.binding_id)

    # ── Stage 2: schemas ───────────────────────────────────────────────────────

    async def _create_schemas(self, document: ImportDocument, project_id: str, user_id: str) -> None:
        for schema in document.schemas:
            try:
                row = await self.schemas.create_with_first_version(
                    project_id=project_id,
                    name=schema.name,
                    schema_text=schema.schema_text,
                    created_by=user_id,
                    description=schema.description,
                    schema_type=schema.type,
                )
            except IntegrityError as exc:
                raise MaterializationError(f"failed to create schema {schema.name}: {exc.orig}") from exc
            self._schema_ids[schema.name] = row.schema_id
            await self._done("schema", schema.name, row.schema_id)
        logger.info("Import stage complete: %d schema(s)", len(document.schemas))

    # ── Stage 3: messages ──────────────────────────────────────────────────────

    async def _create_messages(self, document: ImportDocument, project_id: str, user_id: str) -> None:
        for message in document.messages:
            schema_id = self._schema_ids.get(message.schema_ref.name)
            if schema_id is None:
                raise MaterializationError(
                    f"schema {message.schema_ref.name} not found for message {message.name}"
                )
            schema = await self.schemas.get(schema_id)
            try:
                row = await self.messages.create(
                    message_id=generate_id("msg_"),
                    project_id=project_id,
                    name=message.name,
                    description=message.description,
                    schema_id=schema_id,
                    schema_version=schema.version,
                    created_by=user_id,
                )
            except IntegrityError as exc:
                raise MaterializationError(f"failed to create message {message.name}: {exc.orig}") from exc
            self._message_ids[message.name] = row.message_id
            await self._done("message", message.name, row.message_id)
        logger.info("Import stage complete: %d message(s)", len(document.messages))

    # ── Stage 4: apps and wiring ───────────────────────────────────────────────

    async def _create_apps(self, document: ImportDocument, project_id: str, user_id: str) -> None:
        for app in document.apps:
            try:
                row = await self.apps.create(
                    app_id=generate_id("app_"),
                    project_id=project_id,
                    name=app.name,
                    description=app.description,
                    created_by=user_id,
                )
            except IntegrityError as exc:
                raise MaterializationError(f"failed to create app {app.name}: {exc.orig}") from exc
            await self._done("app", app.name, row.app_id)

            for link in app.sends:
                await self._create_link(app, row.app_id, link, Direction.SENDS, user_id)
            for link in app.receives:
                await self._create_link(app, row.app_id, link, Direction.RECEIVES, user_id)
        logger.info("Import stage complete: %d app(s)", len(document.apps))

    async def _create_link(
        self, app: AppImport, app_id: str, link: LinkImport, direction: Direction, user_id: str
    ) -> None:
        kind = "send" if direction == Direction.SENDS else "receive"

        message_id = self._message_ids.get(link.message)
        if message_id is None:
            raise MaterializationError(f"message '{link.message}' not found for app '{app.name}' {kind}")

        try:
            reference = parse_resource_reference(link.resource)
        except MalformedURIError as exc:
            raise MaterializationError(
                f"failed to parse resource URI for app '{app.name}' {kind}: {exc.reason}"
            ) from exc

        # Unlike binds, an unresolved resource here aborts the import
        resource_id = self._resource_ids.get(reference.key)
        if resource_id is None:
            raise MaterializationError(
                f"resource '{link.resource}' not found for app '{app.name}' {kind} "
                f"(looking for key: {reference.server}.{reference.name})"
            )

        if await self.links.exists(app_id, resource_id, message_id, direction):
            return
        try:
            row = await self.links.create(
                link_id=generate_id("arm_"),
                app_id=app_id,
                resource_id=resource_id,
                message_id=message_id,
                direction=direction,
                created_by=user_id,
            )
        except IntegrityError as exc:
            raise MaterializationError(
                f"failed to create {kind} connection for app '{app.name}': {exc.orig}"
            ) from exc
        await self._done("link", f"{app.name} {direction} {link.message}", row.link_id)
