"""
Tests for CSRF double-submit protection.
"""
from weeklydiary.core.config import settings


def test_csrf_token_matches_cookie(anon_client):
    response = anon_client.get("/api/csrf")
    assert response.status_code == 200
    token = response.json()["csrfToken"]
    assert len(token) == 64
    assert response.cookies[settings.CSRF_COOKIE_NAME] == token


def test_csrf_tokens_are_fresh(anon_client):
    first = anon_client.get("/api/csrf").json()["csrfToken"]
    second = anon_client.get("/api/csrf").json()["csrfToken"]
    assert first != second


def test_mutation_without_header_is_rejected(anon_client):
    anon_client.get("/api/csrf")
    response = anon_client.post("/api/auth/signup", json={"username": "alice", "password": "secret1"})
    assert response.status_code == 403
    assert response.json()["error"] == "CSRF_FAILED"


def test_mutation_without_cookie_is_rejected(anon_client):
    response = anon_client.post(
        "/api/auth/signup",
        json={"username": "alice", "password": "secret1"},
        headers={"X-CSRF-Token": "a" * 64}
    )
    assert response.status_code == 403


def test_mismatched_header_is_rejected(anon_client):
    token = anon_client.get("/api/csrf").json()["csrfToken"]
    response = anon_client.post(
        "/api/auth/logout",
        headers={"X-CSRF-Token": token[:-1] + ("0" if token[-1] != "0" else "1")}
    )
    assert response.status_code == 403


def test_matching_header_passes(anon_client):
    token = anon_client.get("/api/csrf").json()["csrfToken"]
    response = anon_client.post(
        "/api/auth/signup",
        json={"username": "alice", "password": "secret1"},
        headers={"X-CSRF-Token": token}
    )
    assert response.status_code == 201


def test_alternate_header_name_passes(anon_client):
    token = anon_client.get("/api/csrf").json()["csrfToken"]
    response = anon_client.post("/api/auth/logout", headers={"CSRF-Token": token})
    assert response.status_code == 200


def test_safe_methods_are_exempt(anon_client):
    assert anon_client.get("/api/auth/session").status_code == 200
    assert anon_client.get("/health").status_code == 200


def test_every_mutating_method_is_checked(anon_client):
    for method in ["post", "put", "patch", "delete"]:
        response = getattr(anon_client, method)("/api/diary/some-id")
        assert response.status_code == 403, method
