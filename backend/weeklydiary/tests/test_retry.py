"""
Tests for bounded database retries.
"""
import inspect
import pytest
from fastapi.routing import APIRoute
from sqlalchemy.exc import OperationalError
from weeklydiary.db import retry
from weeklydiary.main import app


class FlakyOperation:
    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def __call__(self, db):
        self.calls += 1
        if self.calls <= self.failures:
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))
        return "done"


@pytest.fixture
def sleeps(monkeypatch):
    waits = []
    monkeypatch.setattr(retry.time, "sleep", waits.append)
    return waits


def test_transient_errors_are_retried(db, sleeps):
    operation = FlakyOperation(failures=2)
    assert retry.run_with_retries(db, operation, retries=3, delay=0.3) == "done"
    assert operation.calls == 3
    assert sleeps == pytest.approx([0.3, 0.6])


def test_gives_up_after_last_attempt(db, sleeps):
    operation = FlakyOperation(failures=5)
    with pytest.raises(OperationalError):
        retry.run_with_retries(db, operation, retries=3, delay=0.3)
    assert operation.calls == 3
    assert len(sleeps) == 2


def test_other_errors_are_not_retried(db, sleeps):
    def broken(db):
        raise ValueError("bug")

    with pytest.raises(ValueError):
        retry.run_with_retries(db, broken)
    assert sleeps == []


def test_api_handlers_run_off_the_event_loop():
    """Retry backoff sleeps, so handlers must be sync and run in the threadpool."""
    api_routes = [r for r in app.routes if isinstance(r, APIRoute) and r.path.startswith("/api/")]
    assert api_routes
    for route in api_routes:
        assert not inspect.iscoroutinefunction(route.endpoint), route.path
