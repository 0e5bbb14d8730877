from server.models import User
from tests.conftest import get_random_line_id


def test_line_auth_creates_user(api_client, db_session):
    line_id = get_random_line_id()
    response = api_client.post("/api/auth/line", json={
        "lineAccessToken": "access-token",
        "lineUserID": line_id,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Auth pre-check successful"

    user = db_session.query(User).filter(User.line_user_id == line_id).one()
    assert user.id == data["userId"]
    assert user.display_name == "LINE User"

def test_line_auth_is_idempotent(api_client, db_session):
    line_id = get_random_line_id()
    payload = {"lineAccessToken": "access-token", "lineUserID": line_id}

    first = api_client.post("/api/auth/line", json=payload)
    second = api_client.post("/api/auth/line", json=payload)

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["userId"] == second.json()["userId"]
    assert db_session.query(User).filter(User.line_user_id == line_id).count() == 1

def test_line_auth_uses_display_name(api_client, db_session):
    line_id = get_random_line_id()
    api_client.post("/api/auth/line", json={"lineUserID": line_id, "displayName": "Taro"})

    user = db_session.query(User).filter(User.line_user_id == line_id).one()
    assert user.display_name == "Taro"

def test_line_auth_missing_user_id(api_client, db_session):
    response = api_client.post("/api/auth/line", json={"lineAccessToken": "access-token"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"
    assert db_session.query(User).count() == 0

def test_line_auth_malformed_body(api_client):
    response = api_client.post(
        "/api/auth/line",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request"
