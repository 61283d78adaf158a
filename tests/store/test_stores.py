"""Tests for memory and disk-backed stores."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from covremap.core.errors import ConfigError, ErrorCode, StoreError
from covremap.store import MemoryStore, Store, TmpStore, create_store


@pytest.fixture(params=["memory", "tmp"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> Generator[Store, None, None]:
    s = MemoryStore() if request.param == "memory" else TmpStore(tmp_path)
    yield s
    s.dispose()


class TestStoreContract:
    def test_set_then_get(
        self, store: Store, coverage_factory: Callable[..., dict[str, Any]]
    ) -> None:
        record = coverage_factory("/src/a.js")

        store.set_object("/src/a.js", record)

        assert store.has_key("/src/a.js")
        assert store.get_object("/src/a.js") == record

    def test_keys(self, store: Store) -> None:
        store.set_object("a.js", {"path": "a.js"})
        store.set_object("b.js", {"path": "b.js"})
        store.set_object("a.js", {"path": "a.js", "s": {}})

        assert sorted(store.keys()) == ["a.js", "b.js"]

    def test_unknown_key(self, store: Store) -> None:
        assert not store.has_key("missing.js")
        with pytest.raises(KeyError):
            store.get_object("missing.js")

    def test_returned_object_is_a_copy(self, store: Store) -> None:
        store.set_object("a.js", {"path": "a.js", "s": {"0": 1}})

        fetched = store.get_object("a.js")
        fetched["s"]["0"] = 100

        assert store.get_object("a.js")["s"] == {"0": 1}

    def test_stored_object_is_a_copy(self, store: Store) -> None:
        record = {"path": "a.js", "s": {"0": 1}}
        store.set_object("a.js", record)

        record["s"]["0"] = 100

        assert store.get_object("a.js")["s"] == {"0": 1}

    def test_dispose_twice_is_safe(self, store: Store) -> None:
        store.dispose()
        store.dispose()
        assert store.keys() == []


class TestTmpStore:
    def test_records_live_on_disk(self, tmp_path: Path) -> None:
        store = TmpStore(tmp_path)
        store.set_object("/weird path/ü.js", {"path": "/weird path/ü.js"})

        root = store.root
        assert root is not None
        assert len(list(root.glob("*.json"))) == 1

        store.dispose()
        assert not root.exists()

    def test_use_after_dispose_raises(self, tmp_path: Path) -> None:
        store = TmpStore(tmp_path)
        store.dispose()

        with pytest.raises(StoreError) as exc_info:
            store.set_object("a.js", {"path": "a.js"})

        assert exc_info.value.code == ErrorCode.STORE_DISPOSED

    def test_context_manager_disposes(self, tmp_path: Path) -> None:
        with TmpStore(tmp_path) as store:
            store.set_object("a.js", {"path": "a.js"})
            root = store.root

        assert root is not None
        assert not root.exists()


class TestCreateStore:
    def test_memory(self) -> None:
        assert isinstance(create_store("memory"), MemoryStore)

    def test_tmp(self, tmp_path: Path) -> None:
        store = create_store("tmp", tmp_dir=tmp_path)
        assert isinstance(store, TmpStore)
        store.dispose()

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            create_store("redis")

        assert exc_info.value.details["field"] == "collector.store"
