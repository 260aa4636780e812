import pytest
from fastapi.testclient import TestClient

from voyagehub.config import Settings
from voyagehub.main import create_app


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'voyagehub-test.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        SCHEDULER_ENABLED=False,
        JWT_SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
        RATE_LIMIT_ENABLED=False,
    )


@pytest.fixture()
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture()
def register_user(client):
    def _register(email="alice@example.com", first_name="Alice", last_name="Traveler"):
        res = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": "Secret123!",
                "firstName": first_name,
                "lastName": last_name,
            },
        )
        assert res.status_code == 201, res.text
        body = res.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _register


@pytest.fixture()
def auth_headers(register_user):
    headers, _ = register_user()
    return headers


@pytest.fixture()
def vacation(client, auth_headers):
    res = client.post(
        "/api/vacations",
        json={
            "title": "Lisbon",
            "startDate": "2026-06-01",
            "endDate": "2026-06-10",
            "destinations": [{"name": "Lisbon", "country": "Portugal"}],
        },
        headers=auth_headers,
    )
    assert res.status_code == 201, res.text
    return res.json()
