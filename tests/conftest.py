import pytest
from fastapi.testclient import TestClient

from taskgate.core.config import Settings
from taskgate.main import create_app

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings(tmp_path):
    # Each test gets its own SQLite file
    db_file = tmp_path / "test_taskgate.db"
    return Settings(
        database_url=f"sqlite+aiosqlite:///{db_file}",
        jwt_secret_key=TEST_SECRET,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    def _register(name="Alice", email="alice@x.com", password="pw123"):
        return client.post(
            "/register",
            json={"name": name, "email": email, "password": password},
        )
    return _register


@pytest.fixture
def alice(register_user):
    response = register_user()
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def bob(register_user):
    response = register_user("Bob", "bob@x.com", "hunter2")
    assert response.status_code == 201
    return response.json()
