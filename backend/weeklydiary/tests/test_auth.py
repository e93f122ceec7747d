"""
Tests for authentication endpoints and session handling.
"""
from datetime import timedelta
from weeklydiary.core.config import settings
from weeklydiary.core.security import sign_session_id
from weeklydiary.models.session import UserSession


def test_signup(client):
    """Test user signup."""
    response = client.post(
        "/api/auth/signup",
        json={"username": "testuser", "password": "testpassword123"}
    )
    assert response.status_code == 201
    assert response.json()["userId"]
    assert settings.SESSION_COOKIE_NAME in response.cookies


def test_signup_then_login_returns_same_user(client, make_client, register):
    user_id = register(client, "alice", "secret1")

    other = make_client()
    response = other.post("/api/auth/login", json={"username": "alice", "password": "secret1"})
    assert response.status_code == 200
    assert response.json()["userId"] == user_id


def test_signup_starts_session(client, register):
    user_id = register(client, "alice", "secret1", nickname="Alice")

    response = client.get("/api/auth/session")
    assert response.json() == {
        "loggedIn": True,
        "userId": user_id,
        "username": "alice",
        "nickname": "Alice",
    }


def test_signup_duplicate_username(client, make_client, register):
    register(client, "alice", "secret1")

    response = make_client().post("/api/auth/signup", json={"username": "alice", "password": "another1"})
    assert response.status_code == 409
    assert response.json()["error"] == "USERNAME_TAKEN"


def test_signup_duplicate_nickname(client, make_client, register):
    register(client, "alice", "secret1", nickname="sunny")

    response = make_client().post(
        "/api/auth/signup",
        json={"username": "bob_b", "password": "secret2", "nickname": "sunny"}
    )
    assert response.status_code == 409
    assert response.json()["error"] == "NICKNAME_TAKEN"


def test_signup_rejects_bad_username(client):
    for username in ["ab", "has space", "semi;colon", "x" * 33]:
        response = client.post("/api/auth/signup", json={"username": username, "password": "secret1"})
        assert response.status_code == 400, username
        assert response.json()["error"] == "BAD_USERNAME"


def test_signup_rejects_short_password(client):
    response = client.post("/api/auth/signup", json={"username": "alice", "password": "12345"})
    assert response.status_code == 400
    assert response.json()["error"] == "BAD_PASSWORD"


def test_signup_missing_fields(client):
    response = client.post("/api/auth/signup", json={"username": "alice"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_login_failures_are_indistinguishable(client, make_client, register):
    register(client, "alice", "secret1")

    wrong_password = make_client().post("/api/auth/login", json={"username": "alice", "password": "wrong-pw"})
    unknown_user = make_client().post("/api/auth/login", json={"username": "nobody", "password": "wrong-pw"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json()["error"] == "INVALID_CREDENTIALS"


def test_session_anonymous(client):
    response = client.get("/api/auth/session")
    assert response.status_code == 200
    assert response.json() == {"loggedIn": False}


def test_logout_clears_session(alice, db):
    assert alice.get("/api/auth/session").json()["loggedIn"] is True

    response = alice.post("/api/auth/logout")
    assert response.status_code == 200
    assert db.query(UserSession).count() == 0
    assert alice.get("/api/auth/session").json() == {"loggedIn": False}


def test_logout_without_session(client):
    response = client.post("/api/auth/logout")
    assert response.status_code == 200


def test_expired_session_is_anonymous(alice, db):
    session = db.query(UserSession).one()
    session.created_at = session.created_at - timedelta(days=settings.SESSION_TTL_DAYS, seconds=1)
    db.commit()

    assert alice.get("/api/auth/session").json() == {"loggedIn": False}
    assert alice.get("/api/me").status_code == 401
    # Expired rows are removed when they are encountered
    db.expire_all()
    assert db.query(UserSession).count() == 0


def test_session_within_ttl_touches_last_seen(alice, db):
    session = db.query(UserSession).one()
    session.created_at = session.created_at - timedelta(days=settings.SESSION_TTL_DAYS - 1)
    session.last_seen = session.created_at
    db.commit()
    old_last_seen = session.last_seen

    assert alice.get("/api/auth/session").json()["loggedIn"] is True
    db.expire_all()
    assert db.query(UserSession).one().last_seen > old_last_seen


def test_tampered_session_cookie_is_anonymous(alice, anon_client, db):
    session_id = db.query(UserSession).one().id
    cookie_name = settings.SESSION_COOKIE_NAME

    # The raw id without a signature is not accepted
    response = anon_client.get("/api/auth/session", headers={"Cookie": f"{cookie_name}={session_id}"})
    assert response.json() == {"loggedIn": False}

    response = anon_client.get(
        "/api/auth/session",
        headers={"Cookie": f"{cookie_name}={sign_session_id(session_id)}"}
    )
    assert response.json()["loggedIn"] is True


def test_protected_route_requires_login(client):
    response = client.get("/api/me")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTH_REQUIRED"
