"""Tests for the cache manager."""

from collections.abc import Iterator
from datetime import UTC, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from novelsync.cli.cache.manager import CacheManager
from novelsync.cli.cache.models import CacheBase, CachedIdea, CachedNovel
from novelsync.server.schemas.sync import EntityType, IdeaItem, NovelItem, SyncData


@pytest.fixture
def cache_manager() -> Iterator[CacheManager]:
    """Create a cache manager over an in-memory database."""
    engine = create_engine("sqlite:///:memory:")
    CacheBase.metadata.create_all(engine)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    mgr = CacheManager(session=session)
    yield mgr
    session.close()


def _server_novel(id_: str, title: str, version: int = 1, deleted: bool = False) -> NovelItem:
    return NovelItem(
        id=id_,
        title=title,
        version=version,
        updated_at=datetime(2024, 1, 1, tzinfo=UTC),
        deleted=deleted,
    )


class TestLocalEdits:
    """Creating, updating and deleting records offline."""

    def test_create_marks_dirty(self, cache_manager: CacheManager) -> None:
        novel = cache_manager.create(EntityType.NOVEL, title="Draft")

        assert novel.id
        assert novel.dirty is True
        assert cache_manager.pending_count() == 1
        assert isinstance(novel, CachedNovel)

    def test_create_respects_given_id(self, cache_manager: CacheManager) -> None:
        idea = cache_manager.create(EntityType.IDEA, id="i1", novel_id="n1", content="twist")

        assert idea.id == "i1"
        assert isinstance(idea, CachedIdea)
        assert cache_manager.get(EntityType.IDEA, "i1") is idea

    def test_update_changes_fields(self, cache_manager: CacheManager) -> None:
        novel = cache_manager.create(EntityType.NOVEL, title="Draft")
        cache_manager.clear_dirty([novel])

        updated = cache_manager.update(EntityType.NOVEL, novel.id, title="Final", version=42)

        assert updated is not None
        assert updated.title == "Final"
        assert updated.version == 1
        assert updated.dirty is True

    def test_update_missing_record(self, cache_manager: CacheManager) -> None:
        assert cache_manager.update(EntityType.NOVEL, "missing", title="x") is None

    def test_delete_tombstones(self, cache_manager: CacheManager) -> None:
        novel = cache_manager.create(EntityType.NOVEL, title="Draft")

        assert cache_manager.delete(EntityType.NOVEL, novel.id) is True
        assert cache_manager.list_records(EntityType.NOVEL) == []
        [tombstone] = cache_manager.list_records(EntityType.NOVEL, include_deleted=True)
        assert tombstone.deleted is True
        assert tombstone.dirty is True

    def test_delete_missing_record(self, cache_manager: CacheManager) -> None:
        assert cache_manager.delete(EntityType.CHAPTER, "missing") is False

    def test_dirty_records_grouped_by_collection(self, cache_manager: CacheManager) -> None:
        cache_manager.create(EntityType.NOVEL, id="n1", title="Draft")
        cache_manager.create(EntityType.VOLUME, id="v1", novel_id="n1")

        dirty = cache_manager.get_all_dirty()

        assert [r.id for r in dirty["novels"]] == ["n1"]
        assert [r.id for r in dirty["volumes"]] == ["v1"]
        assert dirty["chapters"] == []
        assert dirty["ideas"] == []

    def test_clear_dirty(self, cache_manager: CacheManager) -> None:
        novel = cache_manager.create(EntityType.NOVEL, title="Draft")

        cache_manager.clear_dirty([novel])

        assert novel.dirty is False
        assert novel.last_synced is not None
        assert cache_manager.pending_count() == 0


class TestWireConversion:
    """Cached records to and from wire items."""

    def test_to_item_omits_local_bookkeeping(self, cache_manager: CacheManager) -> None:
        novel = cache_manager.create(EntityType.NOVEL, id="n1", title="Draft")

        payload = novel.to_item().model_dump(mode="json", by_alias=True)

        assert payload["id"] == "n1"
        assert payload["title"] == "Draft"
        assert payload["wordCount"] == 0
        assert "dirty" not in payload
        assert "lastSynced" not in payload

    def test_apply_item_overwrites_columns(self) -> None:
        novel = CachedNovel(id="n1", title="Old", word_count=5, formatting="{}")

        novel.apply_item(_server_novel("n1", "New", version=3))

        assert novel.title == "New"
        assert novel.version == 3
        assert novel.word_count == 0


class TestApplyPulled:
    """Applying pulled server state."""

    def test_new_records_are_inserted(self, cache_manager: CacheManager) -> None:
        data = SyncData(
            novels=[_server_novel("n1", "Draft")],
            ideas=[IdeaItem(id="i1", novel_id="n1", content="twist", version=1)],
        )

        applied, skipped = cache_manager.apply_pulled(data, 5_000)

        assert (applied, skipped) == (2, 0)
        novel = cache_manager.get(EntityType.NOVEL, "n1")
        assert novel is not None
        assert novel.title == "Draft"
        assert novel.dirty is False
        assert cache_manager.get_cursor() == 5_000

    def test_repeated_delivery_is_harmless(self, cache_manager: CacheManager) -> None:
        data = SyncData(novels=[_server_novel("n1", "Draft")])

        cache_manager.apply_pulled(data, 5_000)
        cache_manager.apply_pulled(data, 6_000)

        assert len(cache_manager.list_records(EntityType.NOVEL)) == 1
        assert cache_manager.get_cursor() == 6_000

    def test_pulled_tombstone_hides_record(self, cache_manager: CacheManager) -> None:
        cache_manager.apply_pulled(SyncData(novels=[_server_novel("n1", "Draft")]), 1)

        cache_manager.apply_pulled(
            SyncData(novels=[_server_novel("n1", "Draft", version=2, deleted=True)]), 2
        )

        assert cache_manager.list_records(EntityType.NOVEL) == []

    def test_dirty_local_record_is_kept(self, cache_manager: CacheManager) -> None:
        cache_manager.create(EntityType.NOVEL, id="n1", title="Local edit")

        applied, skipped = cache_manager.apply_pulled(
            SyncData(novels=[_server_novel("n1", "Server copy", version=4)]), 7_000
        )

        assert (applied, skipped) == (0, 1)
        novel = cache_manager.get(EntityType.NOVEL, "n1")
        assert novel is not None
        assert novel.title == "Local edit"
        assert novel.dirty is True
        assert cache_manager.get_cursor() == 7_000

    def test_failed_apply_rolls_back_records_and_cursor(
        self, cache_manager: CacheManager, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        cache_manager.set_cursor(1_000)

        def failing_set_cursor(cursor: int) -> None:
            raise OperationalError("UPDATE sync_state", {}, Exception("disk I/O error"))

        monkeypatch.setattr(cache_manager.sync_state, "set_cursor", failing_set_cursor)

        with pytest.raises(OperationalError):
            cache_manager.apply_pulled(SyncData(novels=[_server_novel("n1", "Draft")]), 2_000)

        assert cache_manager.get(EntityType.NOVEL, "n1") is None
        assert cache_manager.get_cursor() == 1_000

    def test_cursor_defaults_to_zero(self, cache_manager: CacheManager) -> None:
        assert cache_manager.get_cursor() == 0

        cache_manager.set_cursor(123)

        assert cache_manager.get_cursor() == 123
