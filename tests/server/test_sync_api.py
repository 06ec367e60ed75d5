"""Tests for sync API endpoints."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from novelsync.data.clock import ManualClock, get_clock
from novelsync.data.database import configure_engine
from novelsync.data.repositories import VersionedRepository
from novelsync.server.app import create_app
from novelsync.server.services.sync import SyncService


@pytest.fixture
def manual_clock() -> ManualClock:
    """Clock shared by every request of a test."""
    return ManualClock(start=1_700_000_000_000)


@pytest.fixture
def client(tmp_path: Path, manual_clock: ManualClock) -> Iterator[TestClient]:
    """Create a TestClient with a temporary database and a manual clock."""
    configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'sync.db'}")
    app = create_app()
    app.dependency_overrides[get_clock] = lambda: manual_clock
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


def _push(client: TestClient, changes: dict[str, Any], cursor: int | None = None) -> Any:
    return client.post("/api/sync/push", json={"lastSyncCursor": cursor, "changes": changes})


class TestSyncPushEndpoint:
    """Tests for POST /api/sync/push."""

    def test_push_empty_changes(self, client: TestClient) -> None:
        """Empty changes object succeeds with nothing processed."""
        response = _push(client, {})

        assert response.status_code == 200
        assert response.json() == {"success": True, "processedCount": 0}

    def test_push_creates_records(self, client: TestClient) -> None:
        """Records of every type are applied and counted."""
        response = _push(
            client,
            {
                "novels": [{"id": "n1", "title": "Draft", "userId": "u1"}],
                "volumes": [{"id": "v1", "novelId": "n1", "orderIndex": 0}],
                "chapters": [{"id": "c1", "volumeId": "v1", "wordCount": 2}],
                "ideas": [{"id": "i1", "novelId": "n1", "content": "twist"}],
            },
            cursor=0,
        )

        assert response.status_code == 200
        assert response.json()["processedCount"] == 4

    def test_push_without_changes_is_rejected(self, client: TestClient) -> None:
        """A push body without a changes object is malformed."""
        response = client.post("/api/sync/push", json={"lastSyncCursor": 0})

        assert response.status_code == 422
        assert response.json()["error"] == "Validation Error"

    def test_push_with_negative_cursor_is_rejected(self, client: TestClient) -> None:
        response = _push(client, {}, cursor=-1)

        assert response.status_code == 422

    def test_push_idea_without_content_is_rejected(self, client: TestClient) -> None:
        response = _push(client, {"ideas": [{"id": "i1", "novelId": "n1"}]})

        assert response.status_code == 422

    def test_store_failure_returns_503(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A store fault is reported without applying any record."""

        async def failing_upsert(self: VersionedRepository[Any], records: Any) -> list[Any]:
            raise OperationalError("INSERT", {}, Exception("disk full"))

        monkeypatch.setattr(VersionedRepository, "upsert_all", failing_upsert)

        response = _push(client, {"novels": [{"id": "n1"}]})

        assert response.status_code == 503
        assert response.json()["error"] == "Store Failure"

    def test_unexpected_error_returns_500(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def broken_push(self: SyncService, request: Any) -> Any:
            raise RuntimeError("boom")

        monkeypatch.setattr(SyncService, "push", broken_push)

        response = _push(client, {})

        assert response.status_code == 500
        assert response.json()["error"] == "Internal Server Error"


class TestSyncPullEndpoint:
    """Tests for POST /api/sync/pull."""

    def test_pull_empty_store(self, client: TestClient, manual_clock: ManualClock) -> None:
        response = client.post("/api/sync/pull", json={"lastSyncCursor": 0})

        assert response.status_code == 200
        data = response.json()
        assert data["newSyncCursor"] == manual_clock.cursor
        assert data["data"] == {"novels": [], "volumes": [], "chapters": [], "ideas": []}

    def test_pull_accepts_null_cursor(self, client: TestClient) -> None:
        response = client.post("/api/sync/pull", json={"lastSyncCursor": None})

        assert response.status_code == 200

    def test_pull_with_negative_cursor_is_rejected(self, client: TestClient) -> None:
        response = client.post("/api/sync/pull", json={"lastSyncCursor": -5})

        assert response.status_code == 422

    def test_push_then_pull_round_trip(
        self, client: TestClient, manual_clock: ManualClock
    ) -> None:
        """Pushed records come back in camelCase with store-assigned metadata."""
        _push(client, {"novels": [{"id": "n1", "title": "Draft", "coverUrl": "c.png"}]})

        manual_clock.advance(10)
        response = client.post("/api/sync/pull", json={"lastSyncCursor": 0})

        data = response.json()
        [novel] = data["data"]["novels"]
        assert novel["id"] == "n1"
        assert novel["title"] == "Draft"
        assert novel["coverUrl"] == "c.png"
        assert novel["version"] == 1
        assert novel["deleted"] is False
        assert data["newSyncCursor"] == 1_700_000_000_010

    def test_incremental_pull_skips_older_records(
        self, client: TestClient, manual_clock: ManualClock
    ) -> None:
        _push(client, {"novels": [{"id": "old"}]})
        manual_clock.advance(100)
        cursor = client.post("/api/sync/pull", json={}).json()["newSyncCursor"]

        manual_clock.advance(100)
        _push(client, {"novels": [{"id": "new"}, {"id": "old", "deleted": True}]})
        manual_clock.advance(100)
        data = client.post("/api/sync/pull", json={"lastSyncCursor": cursor}).json()

        novels = {novel["id"]: novel for novel in data["data"]["novels"]}
        assert set(novels) == {"new", "old"}
        assert novels["old"]["deleted"] is True
        assert novels["old"]["version"] == 2
