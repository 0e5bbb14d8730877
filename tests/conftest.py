import random
import string
import pytest
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from server.config import ServerConfig
from server.database import build_engine
from server.main import create_app


def get_random_string(length):
    return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

def get_random_line_id():
    return "U" + ''.join(random.choices("0123456789abcdef", k=32))


class FakeMessenger:
    """Stands in for LineClient; records pushes and answers with a fixed status."""

    def __init__(self, status_code=200):
        self.status_code = status_code
        self.sent = []

    def push_text(self, to, text):
        self.sent.append((to, text))
        return {}, self.status_code

    def push_succeeded(self, to, text):
        _, status_code = self.push_text(to, text)
        return status_code == 200


@pytest.fixture
def engine():
    engine = build_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()

@pytest.fixture
def messenger():
    return FakeMessenger()

@pytest.fixture
def cron_secret():
    return ""

@pytest.fixture
def app(engine, messenger, cron_secret):
    config = ServerConfig(database_url="sqlite://", cron_secret=cron_secret)
    return create_app(config=config, engine=engine, messenger=messenger)

@pytest.fixture
def api_client(app):
    with TestClient(app) as client:
        yield client

@pytest.fixture
def db_session(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def line_user_id():
    return get_random_line_id()

@pytest.fixture
def user_id(api_client, line_user_id):
    response = api_client.post("/api/auth/line", json={
        "lineAccessToken": "token",
        "lineUserID": line_user_id,
    })
    assert response.status_code == 200
    return response.json()["userId"]
