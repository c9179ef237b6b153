import os

# Settings are read once at import time; pin them before any app module loads.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth.jwt_handler import TokenConfig, TokenService, get_token_service
from db.base import Base
from db.session import get_db, init_db
from main import create_app

DEFAULT_PASSWORD = "secret123"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def token_service():
    return TokenService(TokenConfig(secret_key="test-secret", expire_minutes=30))


@pytest.fixture()
def app(session_factory, token_service):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def register(client):
    """Register an account through the API; returns (user, auth headers)."""
    def _register(email, role="team_member", name=None, password=DEFAULT_PASSWORD):
        response = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "name": name or email.split("@")[0].title(),
                "password": password,
                "role": role,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], bearer(body["token"])
    return _register


@pytest.fixture()
def manager(register):
    return register("pm@x.com", role="project_manager", name="Pat Manager")


@pytest.fixture()
def member(register):
    return register("tm@x.com", role="team_member", name="Terry Member")


@pytest.fixture()
def project(client, manager):
    _, headers = manager
    response = client.post("/api/projects", json={"title": "Launch"}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def task(client, manager, project):
    _, headers = manager
    response = client.post(
        f"/api/projects/{project['id']}/tasks",
        json={"title": "Design", "description": "Landing page mockups"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def assigned_task(client, manager, member, task):
    _, headers = manager
    user, _ = member
    response = client.put(
        f"/api/tasks/{task['id']}/assign",
        json={"assignee_id": user["id"]},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return task
