"""
Tests for schedule endpoints.
"""


def _create(c, title="Meeting", start_at="2024-03-15T09:00", **extra):
    return c.post("/api/schedules", json={"title": title, "start_at": start_at, **extra})


def test_create_schedule(alice):
    response = _create(alice, location="Cafe")
    assert response.status_code == 201
    assert response.json()["ok"] is True

    items = alice.get("/api/schedules/day/2024-03-15").json()["items"]
    assert len(items) == 1
    assert items[0]["id"] == response.json()["id"]
    assert items[0]["title"] == "Meeting"
    assert items[0]["location"] == "Cafe"


def test_schedules_for_day_match_date_portion(alice):
    _create(alice, "late", "2024-03-15T23:00")
    _create(alice, "early", "2024-03-15 08:00")
    _create(alice, "next day", "2024-03-16T00:00")

    items = alice.get("/api/schedules/day/2024-03-15").json()["items"]
    assert [i["title"] for i in items] == ["early", "late"]


def test_schedules_in_range(alice):
    for day in ["2024-03-01", "2024-03-10", "2024-03-31", "2024-04-01"]:
        _create(alice, day, f"{day}T10:00")

    response = alice.get("/api/schedules/range", params={"start": "2024-03-01", "end": "2024-03-31"})
    assert [i["title"] for i in response.json()["items"]] == ["2024-03-01", "2024-03-10", "2024-03-31"]


def test_range_rejects_reversed_bounds(alice):
    response = alice.get("/api/schedules/range", params={"start": "2024-03-31", "end": "2024-03-01"})
    assert response.status_code == 400
    assert response.json()["error"] == "BAD_RANGE"


def test_create_rejects_blank_title_and_bad_start(alice):
    assert _create(alice, title="   ").json()["error"] == "VALIDATION_ERROR"
    assert _create(alice, start_at="tomorrow").json()["error"] == "BAD_START_AT"


def test_update_schedule_keeps_omitted_fields(alice):
    schedule_id = _create(alice, location="Office").json()["id"]

    response = alice.patch(f"/api/schedules/{schedule_id}", json={"title": "Renamed"})
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["location"] == "Office"
    assert response.json()["start_at"] == "2024-03-15T09:00"


def test_delete_schedule(alice):
    schedule_id = _create(alice).json()["id"]

    assert alice.delete(f"/api/schedules/{schedule_id}").status_code == 200
    assert alice.get("/api/schedules/day/2024-03-15").json()["items"] == []
    assert alice.delete(f"/api/schedules/{schedule_id}").status_code == 404


def test_schedules_are_private(alice, make_client, register):
    schedule_id = _create(alice).json()["id"]

    bob = make_client()
    register(bob, "bob_b", "secret2")
    assert bob.get("/api/schedules/day/2024-03-15").json()["items"] == []
    response = bob.patch(f"/api/schedules/{schedule_id}", json={"title": "mine now"})
    assert response.status_code == 404
    assert response.json()["error"] == "SCHEDULE_NOT_FOUND"
