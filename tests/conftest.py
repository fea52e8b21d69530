from __future__ import annotations

from datetime import datetime

import pytest

from absence_tracker.container import build_container
from absence_tracker.storage.memory_repository import InMemoryTrackerRepository
from absence_tracker.tracker.service import TrackerService


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday; its week runs Sun 2024-03-10 .. Sat 2024-03-16
    return datetime(2024, 3, 13, 10, 0, 0)


@pytest.fixture
def repo() -> InMemoryTrackerRepository:
    return InMemoryTrackerRepository()


@pytest.fixture
def tracker(repo, fixed_now) -> TrackerService:
    svc = TrackerService(repo, clock=lambda: fixed_now)
    svc.load()
    return svc


@pytest.fixture
def client(monkeypatch, repo):
    monkeypatch.setenv("APP_ENV", "testing")
    from absence_tracker.main import create_app

    container = build_container(repository=repo)
    app = create_app(container=container)
    return app.test_client()
