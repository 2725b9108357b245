from __future__ import annotations

from pathlib import Path

import pytest

from BackEnd.repos import kv_store
from BackEnd.repos.kv_store import PersistenceError


def test_missing_key_returns_none() -> None:
    assert kv_store.get_item("nope") is None


def test_set_then_get_and_overwrite() -> None:
    kv_store.set_item("k", "one")
    assert kv_store.get_item("k") == "one"

    kv_store.set_item("k", "two")
    assert kv_store.get_item("k") == "two"


def test_remove_item() -> None:
    kv_store.set_item("k", "v")
    assert kv_store.remove_item("k") is True
    assert kv_store.get_item("k") is None
    assert kv_store.remove_item("k") is False


def test_only_strings_are_stored() -> None:
    with pytest.raises(TypeError):
        kv_store.set_item("k", 42)


def test_unreachable_store_raises_persistence_error(tmp_path: Path, monkeypatch) -> None:
    # A directory cannot be opened as a database file
    monkeypatch.setattr(kv_store, "db_path", lambda: tmp_path)

    with pytest.raises(PersistenceError):
        kv_store.get_item("k")
    with pytest.raises(PersistenceError):
        kv_store.set_item("k", "v")
