def test_lists_only_team_members(client, manager, member, register) -> None:
    register("pm2@x.com", role="project_manager")
    _, headers = manager
    user, _ = member

    response = client.get("/api/users", headers=headers)
    assert response.status_code == 200
    assert response.json() == {
        "users": [{"id": user["id"], "name": "Terry Member", "email": "tm@x.com"}]
    }


def test_team_member_cannot_browse_directory(client, member) -> None:
    _, headers = member
    response = client.get("/api/users", headers=headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Only Project Managers can view team members"
