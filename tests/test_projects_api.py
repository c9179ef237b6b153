def test_create_project(client, manager) -> None:
    user, headers = manager
    response = client.post(
        "/api/projects",
        json={"title": "  Launch  ", "description": " Go live "},
        headers=headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Launch"
    assert body["description"] == "Go live"
    assert body["owner_id"] == user["id"]
    assert body["created_at"]


def test_team_member_cannot_create_project(client, member) -> None:
    _, headers = member
    response = client.post("/api/projects", json={"title": "Launch"}, headers=headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Only Project Managers can create projects"


def test_project_validation_reports_both_fields(client, manager) -> None:
    _, headers = manager
    response = client.post("/api/projects", json={"title": " ", "description": 5}, headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"] == {
        "title": "Project title is required",
        "description": "Description must be text",
    }


def test_title_unique_per_owner(client, manager, register) -> None:
    _, headers = manager
    _, other_headers = register("pm2@x.com", role="project_manager")

    assert client.post("/api/projects", json={"title": "Launch"}, headers=headers).status_code == 201
    duplicate = client.post("/api/projects", json={"title": " Launch "}, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "You already have a project with this title"

    assert client.post("/api/projects", json={"title": "Launch"}, headers=other_headers).status_code == 201


def test_list_projects_newest_first_with_task_summary(client, manager, register) -> None:
    _, headers = manager
    first = client.post("/api/projects", json={"title": "First"}, headers=headers).json()
    second = client.post("/api/projects", json={"title": "Second"}, headers=headers).json()
    _, other_headers = register("pm2@x.com", role="project_manager")
    client.post("/api/projects", json={"title": "Not mine"}, headers=other_headers)

    client.post(f"/api/projects/{first['id']}/tasks", json={"title": "A"}, headers=headers)
    client.post(f"/api/projects/{first['id']}/tasks", json={"title": "B"}, headers=headers)

    response = client.get("/api/projects", headers=headers)
    assert response.status_code == 200
    projects = response.json()["projects"]
    assert [p["id"] for p in projects] == [second["id"], first["id"]]
    assert projects[0]["task_summary"] == {"todo": 0, "in_progress": 0, "done": 0}
    assert projects[1]["task_summary"] == {"todo": 2, "in_progress": 0, "done": 0}


def test_team_member_cannot_list_projects(client, member) -> None:
    _, headers = member
    assert client.get("/api/projects", headers=headers).status_code == 403
