"""Tests for core/results.py — the result reducer."""

from __future__ import annotations

import pytest

from core.errors import InvalidAction
from core.models import FetchPage, ResultState
from core.results import (
    FetchFailure,
    FetchInit,
    FetchSuccess,
    RemoveItem,
    ResultAccumulator,
    reduce,
)
from tests.factories import make_item

X = make_item("x", title="X")
Y = make_item("y", title="Y")
Z = make_item("z", title="Z")


def settled(*items, page=0) -> ResultState:
    return ResultState(items=tuple(items), current_page=page)


class TestFetchLifecycle:
    def test_init_sets_loading_and_keeps_items(self):
        state = reduce(settled(X, Y, page=2), FetchInit())
        assert state.is_loading is True
        assert state.is_error is False
        assert state.items == (X, Y)
        assert state.current_page == 2

    def test_init_clears_previous_error(self):
        state = reduce(ResultState(is_error=True), FetchInit())
        assert state.is_error is False

    def test_first_page_replaces(self):
        state = reduce(settled(X, Y), FetchSuccess(FetchPage(items=[Z], page=0)))
        assert state.items == (Z,)
        assert state.current_page == 0

    def test_later_page_appends(self):
        state = reduce(settled(X, Y), FetchSuccess(FetchPage(items=[Z], page=1)))
        assert state.items == (X, Y, Z)
        assert state.current_page == 1

    def test_appending_does_not_deduplicate(self):
        state = reduce(settled(X), FetchSuccess(FetchPage(items=[X], page=1)))
        assert state.items == (X, X)

    def test_success_settles_flags(self):
        loading = reduce(settled(), FetchInit())
        state = reduce(loading, FetchSuccess(FetchPage(items=[X], page=0, page_count=4)))
        assert (state.is_loading, state.is_error) == (False, False)
        assert state.page_count == 4

    def test_settling_actions_apply_without_init(self):
        state = reduce(ResultState(), FetchSuccess(FetchPage(items=[X], page=0)))
        assert state.items == (X,)
        state = reduce(state, FetchFailure())
        assert (state.is_loading, state.is_error) == (False, True)

    def test_failure_keeps_stale_items(self):
        loading = reduce(settled(X, Y, page=1), FetchInit())
        state = reduce(loading, FetchFailure())
        assert (state.is_loading, state.is_error) == (False, True)
        assert state.items == (X, Y)
        assert state.current_page == 1


class TestRemoveItem:
    def test_removes_matching_item(self):
        assert reduce(settled(X, Y), RemoveItem("x")).items == (Y,)

    def test_absent_id_is_noop(self):
        assert reduce(settled(Y), RemoveItem("missing")).items == (Y,)

    def test_flags_untouched(self):
        state = reduce(ResultState(items=(X,), is_loading=True), RemoveItem("x"))
        assert state.is_loading is True
        assert state.items == ()


class TestInvalidAction:
    def test_unknown_action_raises(self):
        with pytest.raises(InvalidAction):
            reduce(settled(), "STORIES_FETCH_INIT")

    def test_accumulator_propagates(self):
        acc = ResultAccumulator()
        with pytest.raises(InvalidAction):
            acc.dispatch(object())


class TestResultAccumulator:
    def test_starts_idle(self):
        state = ResultAccumulator().state
        assert state.items == ()
        assert not state.is_loading and not state.is_error

    def test_dispatch_updates_state(self):
        acc = ResultAccumulator()
        acc.dispatch(FetchInit())
        returned = acc.dispatch(FetchSuccess(FetchPage(items=[X, Y], page=0)))
        assert returned is acc.state
        assert acc.state.items == (X, Y)
