"""
Tests for friend requests and friend-only galleries.
"""
import pytest
from weeklydiary.models.diary import DiaryPhoto


@pytest.fixture
def bob(make_client, register):
    c = make_client()
    register(c, "bob_b", "secret2", nickname="Bob")
    return c


def _user_id(c):
    return c.get("/api/auth/session").json()["userId"]


def test_request_and_accept(alice, bob):
    alice_id, bob_id = _user_id(alice), _user_id(bob)

    response = alice.post("/api/friends/request", json={"toUserId": bob_id})
    assert response.json() == {"ok": True, "status": "pending"}

    requests = bob.get("/api/friends/requests").json()["requests"]
    assert [u["id"] for u in requests] == [alice_id]

    response = bob.post("/api/friends/respond", json={"fromUserId": alice_id, "action": "accept"})
    assert response.json()["status"] == "accepted"

    assert [u["id"] for u in alice.get("/api/friends/list").json()["friends"]] == [bob_id]
    assert [u["id"] for u in bob.get("/api/friends/list").json()["friends"]] == [alice_id]
    assert bob.get("/api/friends/requests").json()["requests"] == []


def test_duplicate_and_self_requests(alice, bob):
    bob_id = _user_id(bob)
    alice.post("/api/friends/request", json={"toUserId": bob_id})

    assert alice.post("/api/friends/request", json={"toUserId": bob_id}).json()["error"] == "REQUEST_PENDING"
    assert bob.post("/api/friends/request", json={"toUserId": _user_id(alice)}).status_code == 409
    assert alice.post("/api/friends/request", json={"toUserId": _user_id(alice)}).json()["error"] == "BAD_TARGET"
    assert alice.post("/api/friends/request", json={"toUserId": "missing"}).status_code == 404


def test_rejected_request_can_be_sent_again(alice, bob):
    alice_id = _user_id(alice)
    alice.post("/api/friends/request", json={"toUserId": _user_id(bob)})
    assert bob.post("/api/friends/respond", json={"fromUserId": alice_id, "action": "reject"}).json()["status"] == "rejected"
    assert bob.post("/api/friends/respond", json={"fromUserId": alice_id, "action": "accept"}).status_code == 404

    response = alice.post("/api/friends/request", json={"toUserId": _user_id(bob)})
    assert response.json()["status"] == "pending"


def test_gallery_visible_to_friends_only(alice, bob, db):
    alice_id = _user_id(alice)
    alice.post("/api/diary", json={"date": "2024-03-15", "text": "sunny day"})
    db.add(DiaryPhoto(user_id=alice_id, date="2024-03-15", key="k/a.jpg", mime="image/jpeg", bytes=1))
    db.commit()

    own = alice.get(f"/api/diary/{alice_id}/photos").json()["items"]
    assert own == [{"date": "2024-03-15", "url": "https://cdn.example.test/k/a.jpg", "text": "sunny day", "order_index": 0}]

    assert bob.get(f"/api/diary/{alice_id}/photos").status_code == 404

    bob.post("/api/friends/request", json={"toUserId": alice_id})
    alice.post("/api/friends/respond", json={"fromUserId": _user_id(bob), "action": "accept"})
    assert bob.get(f"/api/diary/{alice_id}/photos").json()["items"] == own
