"""Whole-document validation of import documents.

Every problem is collected; nothing is written. Running the validator twice
against an unchanged project returns the same list.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.errors.exceptions import MalformedURIError, SchemaCompilationError
from eventcatalog.models.enums import ResourceMode, SchemaType
from eventcatalog.models.imports import AppImport, ImportDocument, ResourceImport, ServerImport
from eventcatalog.repositories.app_repo import AppRepository
from eventcatalog.repositories.message_repo import MessageRepository
from eventcatalog.repositories.schema_repo import SchemaRepository
from eventcatalog.repositories.server_repo import ServerRepository
from eventcatalog.services.resource_uri import (
    MODES,
    PROTOCOLS,
    RESOURCE_TYPES,
    ResourceKey,
    ResourceReference,
    format_resource_reference,
    parse_resource_reference,
)
from eventcatalog.services.schema_compiler import compile_schema

logger = logging.getLogger(__name__)

SUPPORTED_DOCUMENT_VERSION = 1

# Column widths of the name columns
MAX_NAME_LENGTH = 45
MAX_RESOURCE_NAME_LENGTH = 100

# (protocol, mode, type) of each declared resource
DeclaredResources = dict[ResourceKey, tuple[str, str, str]]


class ImportValidator:
    """Checks an import document against itself and the target project."""

    def __init__(self, session: AsyncSession):
        self.servers = ServerRepository(session)
        self.schemas = SchemaRepository(session)
        self.messages = MessageRepository(session)
        self.apps = AppRepository(session)

    async def validate(self, document: ImportDocument, project_id: str) -> list[str]:
        errors: list[str] = []

        if document.version != SUPPORTED_DOCUMENT_VERSION:
            errors.append(
                f"invalid version: {document.version}, expected {SUPPORTED_DOCUMENT_VERSION}"
            )

        declared_resources = await self._validate_servers(document, project_id, errors)
        schema_names = await self._validate_schemas(document, project_id, errors)
        message_names = await self._validate_messages(document, project_id, schema_names, errors)
        await self._validate_apps(document, project_id, message_names, declared_resources, errors)

        logger.info(
            "Import document validated for project %s: %d error(s)", project_id, len(errors)
        )
        return errors

    async def _validate_servers(
        self, document: ImportDocument, project_id: str, errors: list[str]
    ) -> DeclaredResources:
        declared: DeclaredResources = {}
        seen_servers: set[str] = set()

        for server in document.servers:
            if not server.name:
                errors.append("server name is required")
                continue
            if not server.type:
                errors.append(f"server type is required for server: {server.name}")
                continue

            protocol_ok = server.type in PROTOCOLS
            if not protocol_ok:
                errors.append(f"invalid server type '{server.type}' for server: {server.name}")
            if len(server.name) > MAX_NAME_LENGTH:
                errors.append(
                    f"server name '{server.name}' is longer than {MAX_NAME_LENGTH} characters"
                )
            if server.name in seen_servers:
                errors.append(f"server name '{server.name}' is declared more than once in the document")
            seen_servers.add(server.name)
            if await self.servers.name_exists(project_id, server.name):
                errors.append(f"server name '{server.name}' already exists in the project")

            resources = self._validate_resources(server, protocol_ok, errors)
            for resource in resources.values():
                declared[ResourceKey(server.name, resource.name)] = (server.type, resource.mode, resource.type)
            # Binds see every resource of their server regardless of declaration order
            self._validate_binds(server, set(resources), errors)

        return declared

    def _validate_resources(
        self, server: ServerImport, protocol_ok: bool, errors: list[str]
    ) -> dict[str, ResourceImport]:
        names: dict[str, ResourceImport] = {}
        for resource in server.resources:
            if not resource.name:
                errors.append(f"resource name is required for server: {server.name}")
                continue
            if not resource.mode:
                errors.append(
                    f"resource mode is required for resource: {resource.name} in server: {server.name}"
                )
                continue
            if not resource.type:
                errors.append(
                    f"resource type is required for resource: {resource.name} in server: {server.name}"
                )
                continue

            enums_ok = True
            if resource.mode not in MODES:
                enums_ok = False
                errors.append(
                    f"invalid mode '{resource.mode}' for resource: {resource.name} in server: {server.name}"
                )
            if resource.type not in RESOURCE_TYPES:
                enums_ok = False
                errors.append(
                    f"invalid type '{resource.type}' for resource: {resource.name} in server: {server.name}"
                )
            if len(resource.name) > MAX_RESOURCE_NAME_LENGTH:
                errors.append(
                    f"resource name '{resource.name}' in server '{server.name}' is longer than "
                    f"{MAX_RESOURCE_NAME_LENGTH} characters"
                )

            if protocol_ok and enums_ok:
                uri = format_resource_reference(
                    server.type, server.name, resource.mode, resource.type, resource.name
                )
                try:
                    parse_resource_reference(uri)
                except MalformedURIError as exc:
                    errors.append(
                        f"invalid resource '{resource.name}' in server '{server.name}': {exc.reason}"
                    )

            if resource.name in names:
                errors.append(
                    f"resource name '{resource.name}' is declared more than once in the document "
                    f"for server: {server.name}"
                )
            else:
                names[resource.name] = resource
        return names

    def _validate_binds(self, server: ServerImport, resource_names: set[str], errors: list[str]) -> None:
        seen: set[frozenset[str]] = set()
        for bind in server.binds:
            if not bind.source or not bind.target:
                errors.append(f"bind source and target are required for server: {server.name}")
                continue
            if bind.source not in resource_names:
                errors.append(f"bind source '{bind.source}' not found in server: {server.name}")
            if bind.target not in resource_names:
                errors.append(f"bind target '{bind.target}' not found in server: {server.name}")

            pair = frozenset((bind.source, bind.target))
            if pair in seen:
                errors.append(
                    f"bind '{bind.source}' -> '{bind.target}' is declared more than once "
                    f"in the document for server: {server.name}"
                )
            seen.add(pair)

    async def _validate_schemas(
        self, document: ImportDocument, project_id: str, errors: list[str]
    ) -> set[str]:
        names: set[str] = set()
        for schema in document.schemas:
            if not schema.name:
                errors.append("schema name is required")
                continue
            if not schema.type:
                errors.append(f"schema type is required for schema: {schema.name}")
                continue
            if not schema.schema_text:
                errors.append(f"schema content is required for schema: {schema.name}")
                continue

            if schema.type != SchemaType.JSONSCHEMA:
                errors.append(
                    f"invalid schema type '{schema.type}' for schema: {schema.name} "
                    "(only 'jsonschema' is supported)"
                )
            else:
                try:
                    compile_schema(schema.schema_text)
                except SchemaCompilationError as exc:
                    errors.append(f"invalid JSON schema for schema '{schema.name}': {exc.message}")

            if len(schema.name) > MAX_NAME_LENGTH:
                errors.append(
                    f"schema name '{schema.name}' is longer than {MAX_NAME_LENGTH} characters"
                )
            if schema.name in names:
                errors.append(f"schema name '{schema.name}' is declared more than once in the document")
            names.add(schema.name)
            if await self.schemas.name_exists(project_id, schema.name):
                errors.append(f"schema name '{schema.name}' already exists in the project")
        return names

    async def _validate_messages(
        self,
        document: ImportDocument,
        project_id: str,
        schema_names: set[str],
        errors: list[str],
    ) -> set[str]:
        names: set[str] = set()
        for message in document.messages:
            if not message.name:
                errors.append("message name is required")
                continue
            if not message.schema_ref.name:
                errors.append(f"schema reference is required for message: {message.name}")
                continue
            # Messages may only bind to schemas declared in the same document
            if message.schema_ref.name not in schema_names:
                errors.append(
                    f"schema '{message.schema_ref.name}' referenced by message '{message.name}' not found"
                )

            if len(message.name) > MAX_NAME_LENGTH:
                errors.append(
                    f"message name '{message.name}' is longer than {MAX_NAME_LENGTH} characters"
                )
            if message.name in names:
                errors.append(f"message name '{message.name}' is declared more than once in the document")
            names.add(message.name)
            if await self.messages.name_exists(project_id, message.name):
                errors.append(f"message name '{message.name}' already exists in the project")
        return names

    async def _validate_apps(
        self,
        document: ImportDocument,
        project_id: str,
        message_names: set[str],
        declared_resources: DeclaredResources,
        errors: list[str],
    ) -> None:
        names: set[str] = set()
        for app in document.apps:
            if not app.name:
                errors.append("app name is required")
                continue

            if len(app.name) > MAX_NAME_LENGTH:
                errors.append(f"app name '{app.name}' is longer than {MAX_NAME_LENGTH} characters")
            if app.name in names:
                errors.append(f"app name '{app.name}' is declared more than once in the document")
            names.add(app.name)
            if await self.apps.name_exists(project_id, app.name):
                errors.append(f"app name '{app.name}' already exists in the project")

            self._validate_links(app, "send", message_names, declared_resources, errors)
            self._validate_links(app, "receive", message_names, declared_resources, errors)

    @staticmethod
    def _validate_links(
        app: AppImport,
        kind: str,
        message_names: set[str],
        declared_resources: DeclaredResources,
        errors: list[str],
    ) -> None:
        links = app.sends if kind == "send" else app.receives
        for link in links:
            if not link.message:
                errors.append(f"message is required for {kind} in app: {app.name}")
                continue
            if not link.resource:
                errors.append(f"resource is required for {kind} in app: {app.name}")
                continue
            if link.message not in message_names:
                errors.append(
                    f"message '{link.message}' referenced in app '{app.name}' {kind} not found"
                )

            try:
                reference = parse_resource_reference(link.resource)
            except MalformedURIError as exc:
                errors.append(
                    f"invalid resource reference '{link.resource}' in app '{app.name}' {kind}: {exc.reason}"
                )
                continue
            declared = declared_resources.get(reference.key)
            if declared is None:
                errors.append(
                    f"resource '{link.resource}' referenced in app '{app.name}' {kind} "
                    "is not declared in the document"
                )
                continue
            mismatch = _reference_mismatch(reference, *declared)
            if mismatch:
                errors.append(
                    f"resource '{link.resource}' referenced in app '{app.name}' {kind} {mismatch}"
                )


def _reference_mismatch(
    reference: ResourceReference, protocol: str, mode: str, resource_type: str
) -> str | None:
    """Describe how a reference disagrees with the resource it names, or None."""
    if reference.protocol != protocol:
        return f"uses protocol '{reference.protocol}' but server '{reference.server}' is '{protocol}'"
    if reference.resource_type != resource_type:
        return f"uses type '{reference.resource_type}' but the resource is a '{resource_type}'"
    # A readwrite resource may be referenced for reading or writing
    if mode != ResourceMode.READWRITE and reference.mode != mode:
        return f"uses mode '{reference.mode}' but the resource is '{mode}'"
    return None
