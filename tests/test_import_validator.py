"""Tests for whole-document import validation.

Covers: the valid scenario, per-section field checks, enum checks, in-document
references, app references that disagree with the declared resource,
collisions with existing entities, in-document duplicates, batch
error collection and repeatability.
"""

from pathlib import Path

import pytest

from eventcatalog.db.base import STATUS_DELETED
from eventcatalog.repositories.project_repo import ProjectRepository
from eventcatalog.repositories.server_repo import ServerRepository
from eventcatalog.repositories.user_repo import UserRepository
from eventcatalog.services.imports.document import parse_document
from eventcatalog.services.imports.validator import ImportValidator

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

SCHEMA = '{"$schema": "http://json-schema.org/draft-07/schema#", "type": "object"}'


@pytest.fixture
async def project_id(db_session):
    await UserRepository(db_session).create(
        user_id="usr_validator", email="v@example.com", handle="validator"
    )
    await ProjectRepository(db_session).create(
        project_id="proj_validator", name="Validator", created_by="usr_validator"
    )
    await db_session.commit()
    return "proj_validator"


async def _validate(db_session, project_id, text: str) -> list[str]:
    return await ImportValidator(db_session).validate(parse_document(text), project_id)


def _checkout(**replacements: str) -> str:
    text = (FIXTURES_DIR / "checkout_import.yaml").read_text(encoding="utf-8")
    for old, new in replacements.items():
        text = text.replace(old, new)
    return text


@pytest.mark.asyncio
async def test_valid_document_has_no_errors(db_session, project_id):
    assert await _validate(db_session, project_id, _checkout()) == []


@pytest.mark.asyncio
async def test_full_document_has_no_errors(db_session, project_id):
    text = (FIXTURES_DIR / "full_import.yaml").read_text(encoding="utf-8")
    assert await _validate(db_session, project_id, text) == []


@pytest.mark.asyncio
async def test_wrong_version_is_reported_without_stopping(db_session, project_id):
    errors = await _validate(
        db_session, project_id, "version: 2\napps:\n  - description: nameless\n"
    )
    assert errors == ["invalid version: 2, expected 1", "app name is required"]


@pytest.mark.asyncio
async def test_server_field_checks(db_session, project_id):
    text = """
version: 1
servers:
  - type: kafka
  - name: no_type
  - name: smtp_server
    type: smtp
"""
    errors = await _validate(db_session, project_id, text)
    assert errors == [
        "server name is required",
        "server type is required for server: no_type",
        "invalid server type 'smtp' for server: smtp_server",
    ]


@pytest.mark.asyncio
async def test_resource_field_checks(db_session, project_id):
    text = """
version: 1
servers:
  - name: k
    type: kafka
    resources:
      - mode: read
        type: topic
      - name: no_mode
        type: topic
      - name: no_type
        mode: read
      - name: bad_enums
        mode: append
        type: stream
      - name: has space
        mode: read
        type: topic
"""
    errors = await _validate(db_session, project_id, text)
    assert errors[0] == "resource name is required for server: k"
    assert errors[1] == "resource mode is required for resource: no_mode in server: k"
    assert errors[2] == "resource type is required for resource: no_type in server: k"
    assert errors[3] == "invalid mode 'append' for resource: bad_enums in server: k"
    assert errors[4] == "invalid type 'stream' for resource: bad_enums in server: k"
    assert errors[5].startswith("invalid resource 'has space' in server 'k':")
    assert len(errors) == 6


@pytest.mark.asyncio
async def test_binds_see_resources_declared_later(db_session, project_id):
    text = """
version: 1
servers:
  - name: k
    type: kafka
    binds:
      - source: a
        target: b
      - source: a
        target: missing
      - source: a
    resources:
      - {name: a, mode: read, type: topic}
      - {name: b, mode: read, type: topic}
"""
    errors = await _validate(db_session, project_id, text)
    assert errors == [
        "bind target 'missing' not found in server: k",
        "bind source and target are required for server: k",
    ]


@pytest.mark.asyncio
async def test_bind_cannot_reach_another_server(db_session, project_id):
    text = """
version: 1
servers:
  - name: k1
    type: kafka
    resources:
      - {name: a, mode: read, type: topic}
  - name: k2
    type: kafka
    resources:
      - {name: b, mode: read, type: topic}
    binds:
      - {source: b, target: a}
"""
    errors = await _validate(db_session, project_id, text)
    assert errors == ["bind target 'a' not found in server: k2"]


@pytest.mark.asyncio
async def test_invalid_json_schema_names_the_schema(db_session, project_id):
    errors = await _validate(db_session, project_id, _checkout(**{'"type": "object"}': '"type": '}))
    assert len(errors) == 1
    assert errors[0].startswith("invalid JSON schema for schema 'Order':")


@pytest.mark.asyncio
async def test_schema_field_checks(db_session, project_id):
    text = f"""
version: 1
schemas:
  - type: jsonschema
    schema: '{SCHEMA}'
  - name: NoType
    schema: '{SCHEMA}'
  - name: NoContent
    type: jsonschema
  - name: Avro
    type: avro
    schema: '{{}}'
"""
    errors = await _validate(db_session, project_id, text)
    assert errors == [
        "schema name is required",
        "schema type is required for schema: NoType",
        "schema content is required for schema: NoContent",
        "invalid schema type 'avro' for schema: Avro (only 'jsonschema' is supported)",
    ]


@pytest.mark.asyncio
async def test_message_must_reference_schema_in_document(db_session, project_id):
    text = f"""
version: 1
schemas:
  - name: Order
    type: jsonschema
    schema: '{SCHEMA}'
messages:
  - schema: {{name: Order}}
  - name: no_schema
  - name: dangling
    schema: {{name: Payment}}
"""
    errors = await _validate(db_session, project_id, text)
    assert errors == [
        "message name is required",
        "schema reference is required for message: no_schema",
        "schema 'Payment' referenced by message 'dangling' not found",
    ]


@pytest.mark.asyncio
async def test_app_references_unknown_message(db_session, project_id):
    errors = await _validate(
        db_session, project_id, _checkout(**{"- message: order_created": "- message: order_shipped"})
    )
    assert errors == ["message 'order_shipped' referenced in app 'checkout' send not found"]


@pytest.mark.asyncio
async def test_app_link_checks(db_session, project_id):
    text = _checkout() + """    receives:
      - resource: async+kafka://kafka_server@read/topic/orders
      - message: order_created
      - message: order_created
        resource: not-a-reference
      - message: order_created
        resource: async+kafka://kafka_server@read/topic/payments
"""
    errors = await _validate(db_session, project_id, text)
    assert errors[0] == "message is required for receive in app: checkout"
    assert errors[1] == "resource is required for receive in app: checkout"
    assert errors[2].startswith("invalid resource reference 'not-a-reference' in app 'checkout' receive:")
    assert errors[3] == (
        "resource 'async+kafka://kafka_server@read/topic/payments' referenced in app "
        "'checkout' receive is not declared in the document"
    )
    assert len(errors) == 4


@pytest.mark.asyncio
async def test_app_reference_must_agree_with_declared_resource(db_session, project_id):
    # orders is declared as a write topic on a kafka server
    text = _checkout() + """    receives:
      - message: order_created
        resource: async+amqp://kafka_server@write/topic/orders
      - message: order_created
        resource: async+kafka://kafka_server@write/queue/orders
      - message: order_created
        resource: async+kafka://kafka_server@read/topic/orders
"""
    errors = await _validate(db_session, project_id, text)
    assert errors == [
        "resource 'async+amqp://kafka_server@write/topic/orders' referenced in app 'checkout' "
        "receive uses protocol 'amqp' but server 'kafka_server' is 'kafka'",
        "resource 'async+kafka://kafka_server@write/queue/orders' referenced in app 'checkout' "
        "receive uses type 'queue' but the resource is a 'topic'",
        "resource 'async+kafka://kafka_server@read/topic/orders' referenced in app 'checkout' "
        "receive uses mode 'read' but the resource is 'write'",
    ]


@pytest.mark.asyncio
async def test_readwrite_resource_accepts_read_and_write_references(db_session, project_id):
    text = _checkout(**{"mode: write": "mode: readwrite"}) + """    receives:
      - message: order_created
        resource: kafka://kafka_server@read/topic/orders
"""
    assert await _validate(db_session, project_id, text) == []


@pytest.mark.asyncio
async def test_collisions_with_existing_entities(db_session, project_id):
    await ServerRepository(db_session).create(
        server_id="srv_existing",
        project_id=project_id,
        name="kafka_server",
        protocol="kafka",
        created_by="usr_validator",
    )
    await db_session.commit()

    errors = await _validate(db_session, project_id, _checkout())
    assert errors == ["server name 'kafka_server' already exists in the project"]


@pytest.mark.asyncio
async def test_deleted_entities_do_not_collide(db_session, project_id):
    await ServerRepository(db_session).create(
        server_id="srv_gone",
        project_id=project_id,
        name="kafka_server",
        protocol="kafka",
        status=STATUS_DELETED,
        created_by="usr_validator",
    )
    await db_session.commit()

    assert await _validate(db_session, project_id, _checkout()) == []


@pytest.mark.asyncio
async def test_duplicates_within_document(db_session, project_id):
    text = f"""
version: 1
servers:
  - name: svc
    type: kafka
    resources:
      - {{name: a, mode: read, type: topic}}
      - {{name: a, mode: read, type: topic}}
      - {{name: b, mode: read, type: topic}}
    binds:
      - {{source: a, target: b}}
      - {{source: b, target: a}}
  - name: svc
    type: amqp
schemas:
  - {{name: S, type: jsonschema, schema: '{SCHEMA}'}}
  - {{name: S, type: jsonschema, schema: '{SCHEMA}'}}
messages:
  - {{name: m, schema: {{name: S}}}}
  - {{name: m, schema: {{name: S}}}}
apps:
  - name: x
  - name: x
"""
    errors = await _validate(db_session, project_id, text)
    assert errors == [
        "resource name 'a' is declared more than once in the document for server: svc",
        "bind 'b' -> 'a' is declared more than once in the document for server: svc",
        "server name 'svc' is declared more than once in the document",
        "schema name 'S' is declared more than once in the document",
        "message name 'm' is declared more than once in the document",
        "app name 'x' is declared more than once in the document",
    ]


@pytest.mark.asyncio
async def test_overlong_names_are_reported(db_session, project_id):
    long_name = "s" * 46
    text = f"version: 1\nservers:\n  - name: {long_name}\n    type: kafka\n"
    errors = await _validate(db_session, project_id, text)
    assert errors == [f"server name '{long_name}' is longer than 45 characters"]


@pytest.mark.asyncio
async def test_validation_is_repeatable(db_session, project_id):
    text = _checkout(**{"type: kafka": "type: smtp"})
    first = await _validate(db_session, project_id, text)
    second = await _validate(db_session, project_id, text)
    assert first
    assert first == second
