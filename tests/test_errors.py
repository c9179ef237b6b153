from fastapi.testclient import TestClient

from app.errors import AuthorizationError, BadRequestError, ValidationError


def test_error_bodies() -> None:
    assert ValidationError({"title": "required"}).to_dict() == {
        "message": "Validation failed",
        "errors": {"title": "required"},
    }
    assert AuthorizationError("nope").to_dict() == {"error": "nope"}
    assert BadRequestError("bad", details="why", assignee_id=3).to_dict() == {
        "error": "bad",
        "details": "why",
        "assignee_id": 3,
    }


def test_malformed_json_is_a_400(client) -> None:
    response = client.post(
        "/api/auth/register",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_unexpected_errors_do_not_leak(app) -> None:
    def explode():
        raise RuntimeError("database password is hunter2")

    app.add_api_route("/boom", explode)
    response = TestClient(app, raise_server_exceptions=False).get("/boom")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_health_and_root(client) -> None:
    assert client.get("/health").json() == {"status": "ok", "database": "up"}
    assert client.get("/").status_code == 200
