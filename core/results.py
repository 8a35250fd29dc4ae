"""Result accumulation as a reducer over ``ResultState``.

Transitions
───────────
FetchInit     any       → loading   (items untouched)
FetchSuccess  loading   → settled   (page 0 replaces items, page N appends)
FetchFailure  loading   → settled   (items untouched, error flag set)
RemoveItem    any       → same      (drops the item with the given id)

FetchSuccess and FetchFailure are also applied when nothing is loading; the
session only dispatches them after a FetchInit for the current query.
Any other action raises ``InvalidAction``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.errors import InvalidAction
from core.models import FetchPage, ResultState

logger = logging.getLogger(__name__)


# ── Actions ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FetchInit:
    pass


@dataclass(frozen=True)
class FetchSuccess:
    payload: FetchPage


@dataclass(frozen=True)
class FetchFailure:
    error: str = ""


@dataclass(frozen=True)
class RemoveItem:
    item_id: str


# ── Reducer ────────────────────────────────────────────────────────────────────


def reduce(state: ResultState, action: object) -> ResultState:
    """Return the state that results from applying *action* to *state*.

    Raises:
        InvalidAction: If *action* is not one of the known action types.
    """
    if isinstance(action, FetchInit):
        return state.model_copy(update={"is_loading": True, "is_error": False})

    if isinstance(action, FetchSuccess):
        page = action.payload
        if page.page == 0:
            items = tuple(page.items)
        else:
            items = state.items + tuple(page.items)
        return state.model_copy(
            update={
                "items": items,
                "current_page": page.page,
                "page_count": page.page_count,
                "is_loading": False,
                "is_error": False,
            }
        )

    if isinstance(action, FetchFailure):
        return state.model_copy(update={"is_loading": False, "is_error": True})

    if isinstance(action, RemoveItem):
        item_id = str(action.item_id)
        items = tuple(item for item in state.items if item.id != item_id)
        return state.model_copy(update={"items": items})

    raise InvalidAction(f"Unknown result action: {action!r}")


class ResultAccumulator:
    """Holds the current ``ResultState`` and is its only writer."""

    def __init__(self, state: ResultState | None = None) -> None:
        self._state = state or ResultState()

    @property
    def state(self) -> ResultState:
        return self._state

    def dispatch(self, action: object) -> ResultState:
        self._state = reduce(self._state, action)
        logger.debug(
            "%s -> items=%d page=%d loading=%s error=%s",
            type(action).__name__,
            len(self._state.items),
            self._state.current_page,
            self._state.is_loading,
            self._state.is_error,
        )
        return self._state
