"""API tests for project endpoints."""

import pytest


@pytest.mark.asyncio
async def test_create_project(auth_client, user):
    response = await auth_client.post("/api/v1/projects", json={"name": "Payments", "description": "p"})
    assert response.status_code == 201
    body = response.json()
    assert body["project_id"].startswith("proj_")
    assert body["name"] == "Payments"
    assert body["status"] == "active"
    assert body["created_by"] == user.user_id
    assert "X-Trace-Id" in response.headers


@pytest.mark.asyncio
async def test_create_project_duplicate_name(auth_client, project):
    response = await auth_client.post("/api/v1/projects", json={"name": project["name"]})
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "has space", "under_score", "x" * 46])
async def test_create_project_invalid_name(auth_client, name):
    response = await auth_client.post("/api/v1/projects", json={"name": name})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_projects_sorted_by_name(auth_client):
    for name in ("Zeta", "Alpha"):
        await auth_client.post("/api/v1/projects", json={"name": name})
    response = await auth_client.get("/api/v1/projects")
    assert [p["name"] for p in response.json()] == ["Alpha", "Zeta"]


@pytest.mark.asyncio
async def test_get_project(auth_client, project):
    response = await auth_client.get(f"/api/v1/projects/{project['project_id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Shop"


@pytest.mark.asyncio
async def test_get_project_not_found(auth_client):
    response = await auth_client.get("/api/v1/projects/proj_nonexistent")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_projects_require_authentication(client):
    assert (await client.get("/api/v1/projects")).status_code == 401
    assert (await client.post("/api/v1/projects", json={"name": "Nope"})).status_code == 401
