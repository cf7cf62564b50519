"""API tests for messages and their pinning to a schema version."""

import json

import pytest

DRAFT7 = "http://json-schema.org/draft-07/schema#"


async def _schema(auth_client, project_id: str, name: str = "Order") -> dict:
    response = await auth_client.post(
        f"/api/v1/projects/{project_id}/schemas",
        json={"name": name, "schema": json.dumps({"$schema": DRAFT7, "type": "object"})},
    )
    assert response.status_code == 201
    return response.json()


async def _bump(auth_client, schema_id: str, marker: str) -> dict:
    text = json.dumps({"$schema": DRAFT7, "type": "object", "title": marker})
    response = await auth_client.put(f"/api/v1/schemas/{schema_id}", json={"schema": text})
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_message_stays_pinned_after_schema_edit(auth_client, project):
    schema = await _schema(auth_client, project["project_id"])
    await _bump(auth_client, schema["schema_id"], "v2")

    created = await auth_client.post(
        f"/api/v1/projects/{project['project_id']}/messages",
        json={"name": "order_created", "schema_id": schema["schema_id"], "schema_version": 2},
    )
    assert created.status_code == 201

    bumped = await _bump(auth_client, schema["schema_id"], "v3")
    assert bumped["version"] == 3

    listed = await auth_client.get(f"/api/v1/projects/{project['project_id']}/messages")
    message = listed.json()[0]
    assert (message["schema_id"], message["schema_version"]) == (schema["schema_id"], 2)


@pytest.mark.asyncio
async def test_message_needs_existing_version(auth_client, project):
    schema = await _schema(auth_client, project["project_id"])
    response = await auth_client.post(
        f"/api/v1/projects/{project['project_id']}/messages",
        json={"name": "order_created", "schema_id": schema["schema_id"], "schema_version": 2},
    )
    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"latest_version": 1}


@pytest.mark.asyncio
async def test_message_schema_must_belong_to_project(auth_client, project):
    other = (await auth_client.post("/api/v1/projects", json={"name": "Other"})).json()
    schema = await _schema(auth_client, other["project_id"])
    response = await auth_client.post(
        f"/api/v1/projects/{project['project_id']}/messages",
        json={"name": "order_created", "schema_id": schema["schema_id"], "schema_version": 1},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_message_unknown_schema(auth_client, project):
    response = await auth_client.post(
        f"/api/v1/projects/{project['project_id']}/messages",
        json={"name": "order_created", "schema_id": "sch_missing", "schema_version": 1},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_message_name_unique_within_project(auth_client, project):
    schema = await _schema(auth_client, project["project_id"])
    body = {"name": "order_created", "schema_id": schema["schema_id"], "schema_version": 1}
    await auth_client.post(f"/api/v1/projects/{project['project_id']}/messages", json=body)
    response = await auth_client.post(f"/api/v1/projects/{project['project_id']}/messages", json=body)
    assert response.status_code == 409
