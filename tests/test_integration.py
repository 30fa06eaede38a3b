from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY
from sqlalchemy.exc import OperationalError

from course_catalog.infrastructure.db import get_db
from course_catalog.main import app


def test_full_course_lifecycle(client):
    """Signup, create, edit, and delete a course, checking the public list at each step"""
    owner = {"firstName": "Ada", "lastName": "Lovelace", "emailAddress": "ada@example.com", "password": "engine"}
    other = {"firstName": "Charles", "lastName": "Babbage", "emailAddress": "charles@example.com", "password": "difference"}
    assert client.post("/users", json=owner).status_code == 201
    assert client.post("/users", json=other).status_code == 201
    ada = ("ada@example.com", "engine")
    charles = ("charles@example.com", "difference")

    # 1. Create
    create_response = client.post(
        "/courses",
        json={"title": "Notes on the Analytical Engine", "description": "Note G"},
        auth=ada,
    )
    assert create_response.status_code == 201
    location = create_response.headers["location"]

    # 2. Public list
    courses = client.get("/courses").json()
    assert len(courses) == 1
    assert courses[0]["User"]["emailAddress"] == "ada@example.com"

    # 3. Someone else cannot touch it
    assert client.put(location, json={"title": "x", "description": "y"}, auth=charles).status_code == 403
    assert client.delete(location, auth=charles).status_code == 403

    # 4. Owner edits
    assert client.put(
        location,
        json={"title": "Notes, revised", "description": "Note G", "estimatedTime": "1 week"},
        auth=ada,
    ).status_code == 204
    detail = client.get(location).json()
    assert detail["title"] == "Notes, revised"
    assert detail["estimatedTime"] == "1 week"

    # 5. Owner deletes
    assert client.delete(location, auth=ada).status_code == 204
    assert client.get(location).status_code == 404
    assert client.get("/courses").json() == []


def test_persistence_failure_is_a_generic_500():
    broken = MagicMock()
    broken.execute.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))

    def broken_db():
        yield broken

    app.dependency_overrides[get_db] = broken_db
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/courses")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "An unexpected error occurred"}
    assert "locked" not in response.text

    # the failed request is still counted under its route template
    assert REGISTRY.get_sample_value(
        "http_requests_total", {"method": "GET", "endpoint": "/courses", "status": "500"}
    ) >= 1


def test_unknown_route(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_json_charset(client):
    response = client.get("/courses")
    assert response.headers["content-type"] == "application/json; charset=utf-8"


def test_metrics_endpoint(client):
    client.get("/courses")
    client.get("/users")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "http_requests_total" in response.text
    assert 'endpoint="/courses"' in response.text
    assert "auth_failures_total" in response.text
