"""API tests for servers, resources and resource bindings.

Covers: creation and listing, name scoping, binding symmetry and
same-server enforcement.
"""

import pytest


async def _server(auth_client, project_id: str, name: str = "kafka_server", protocol: str = "kafka") -> dict:
    response = await auth_client.post(
        f"/api/v1/projects/{project_id}/servers", json={"name": name, "protocol": protocol}
    )
    assert response.status_code == 201
    return response.json()


async def _resource(auth_client, server_id: str, name: str) -> dict:
    response = await auth_client.post(
        f"/api/v1/servers/{server_id}/resources",
        json={"name": name, "mode": "readwrite", "resource_type": "topic"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_create_and_list_servers(auth_client, project):
    server = await _server(auth_client, project["project_id"])
    assert server["server_id"].startswith("srv_")
    assert server["protocol"] == "kafka"

    response = await auth_client.get(f"/api/v1/projects/{project['project_id']}/servers")
    assert [s["name"] for s in response.json()] == ["kafka_server"]


@pytest.mark.asyncio
async def test_server_name_unique_within_project(auth_client, project):
    await _server(auth_client, project["project_id"])
    response = await auth_client.post(
        f"/api/v1/projects/{project['project_id']}/servers", json={"name": "kafka_server", "protocol": "amqp"}
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_server_protocol_must_be_known(auth_client, project):
    response = await auth_client.post(
        f"/api/v1/projects/{project['project_id']}/servers", json={"name": "mail", "protocol": "smtp"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_server_in_unknown_project(auth_client):
    response = await auth_client.post(
        "/api/v1/projects/proj_missing/servers", json={"name": "k", "protocol": "kafka"}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_resource_names_scoped_to_server(auth_client, project):
    first = await _server(auth_client, project["project_id"], "k1")
    second = await _server(auth_client, project["project_id"], "k2")
    await _resource(auth_client, first["server_id"], "orders")
    await _resource(auth_client, second["server_id"], "orders")

    response = await auth_client.post(
        f"/api/v1/servers/{first['server_id']}/resources",
        json={"name": "orders", "mode": "read", "resource_type": "topic"},
    )
    assert response.status_code == 409

    listed = await auth_client.get(f"/api/v1/servers/{first['server_id']}/resources")
    assert [r["name"] for r in listed.json()] == ["orders"]


@pytest.mark.asyncio
async def test_binding_symmetry(auth_client, project):
    server = await _server(auth_client, project["project_id"])
    a = await _resource(auth_client, server["server_id"], "a")
    b = await _resource(auth_client, server["server_id"], "b")

    created = await auth_client.post(
        f"/api/v1/servers/{server['server_id']}/binds",
        json={"source_resource_id": a["resource_id"], "target_resource_id": b["resource_id"]},
    )
    assert created.status_code == 201
    assert created.json()["binding_id"].startswith("bind_")

    reversed_ = await auth_client.post(
        f"/api/v1/servers/{server['server_id']}/binds",
        json={"source_resource_id": b["resource_id"], "target_resource_id": a["resource_id"]},
    )
    assert reversed_.status_code == 409

    listed = await auth_client.get(f"/api/v1/servers/{server['server_id']}/binds")
    assert len(listed.json()) == 1


@pytest.mark.asyncio
async def test_binding_across_servers_is_rejected(auth_client, project):
    first = await _server(auth_client, project["project_id"], "k1")
    second = await _server(auth_client, project["project_id"], "k2")
    a = await _resource(auth_client, first["server_id"], "a")
    b = await _resource(auth_client, second["server_id"], "b")

    response = await auth_client.post(
        f"/api/v1/servers/{first['server_id']}/binds",
        json={"source_resource_id": a["resource_id"], "target_resource_id": b["resource_id"]},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_binding_unknown_resource(auth_client, project):
    server = await _server(auth_client, project["project_id"])
    a = await _resource(auth_client, server["server_id"], "a")
    response = await auth_client.post(
        f"/api/v1/servers/{server['server_id']}/binds",
        json={"source_resource_id": a["resource_id"], "target_resource_id": "res_missing"},
    )
    assert response.status_code == 404
