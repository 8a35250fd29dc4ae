"""
Tests for core/history.py and core/storage.py

Uses a temporary SQLite file so no real session DB is touched.

Run with: pytest tests/test_history.py
"""

import pytest

from core.history import collapse_terms, recent_searches
from core.models import Query
from core.storage import MemoryStorage, SqliteStorage


def q(term: str, page: int = 0) -> Query:
    return Query(search_term=term, page=page)


class TestRecentSearches:
    def test_collapses_adjacent_duplicates_and_drops_current(self):
        log = [q("a"), q("a", 1), q("b"), q("c"), q("d")]
        assert recent_searches(log) == ["a", "b", "c"]

    def test_runs_of_repeated_terms(self):
        log = [q("a"), q("a", 1), q("b"), q("b", 1), q("b", 2), q("c"), q("d")]
        assert recent_searches(log) == ["a", "b", "c"]

    def test_non_adjacent_repeats_are_kept(self):
        log = [q("a"), q("b"), q("a"), q("c")]
        assert recent_searches(log) == ["a", "b", "a"]

    def test_window_keeps_last_five_previous(self):
        log = [q(term) for term in "abcdefgh"]
        assert recent_searches(log) == ["c", "d", "e", "f", "g"]

    def test_empty_terms_are_dropped(self):
        log = [q("a"), q("  "), q("b")]
        assert recent_searches(log) == ["a"]

    def test_single_term_gives_nothing(self):
        assert recent_searches([q("a"), q("a", 1)]) == []

    def test_empty_log(self):
        assert recent_searches([]) == []

    def test_custom_limit(self):
        log = [q(term) for term in "abcd"]
        assert recent_searches(log, limit=2) == ["b", "c"]

    def test_collapse_terms(self):
        assert collapse_terms([q("x"), q("x", 1), q("y")]) == ["x", "y"]


@pytest.fixture
def storage(tmp_path) -> SqliteStorage:
    store = SqliteStorage(tmp_path / "nested" / "session.db")
    store.init_db()
    return store


class TestSqliteStorage:
    def test_missing_key_returns_none(self, storage):
        assert storage.load_string("search") is None

    def test_save_then_load(self, storage):
        storage.save_string("search", "react")
        assert storage.load_string("search") == "react"

    def test_save_overwrites(self, storage):
        storage.save_string("search", "react")
        storage.save_string("search", "redux")
        assert storage.load_string("search") == "redux"

    def test_empty_string_is_stored(self, storage):
        storage.save_string("search", "")
        assert storage.load_string("search") == ""

    def test_values_survive_a_new_instance(self, storage):
        storage.save_string("search", "react")
        assert SqliteStorage(storage.path).load_string("search") == "react"

    def test_creates_parent_directory(self, storage):
        assert storage.path.parent.is_dir()


class TestMemoryStorage:
    def test_seeded_values(self):
        store = MemoryStorage({"search": "react"})
        assert store.load_string("search") == "react"
        assert store.load_string("other") is None

    def test_save(self):
        store = MemoryStorage()
        store.save_string("search", "vue")
        assert store.values == {"search": "vue"}
