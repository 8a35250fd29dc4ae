"""Search session orchestration.

A ``SearchSession`` owns the current search term and the query log, drives
the fetch lifecycle against a transport, and exposes the state a view needs
plus the six user intents:

    set_search_term, submit_search, select_from_history,
    load_more, remove_item, sort_by

Every new entry in the query log triggers exactly one fetch for that entry.
Responses for queries that are no longer the log tail when they resolve are
discarded, so a slow earlier request never overwrites a newer one.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Union

from config.settings import DEFAULT_API_BASE_URL
from core.client import Transport
from core.errors import TransportError
from core.history import DEFAULT_HISTORY_SIZE, recent_searches
from core.models import Query, ResultState, SessionView, SortKey, SortSpec
from core.results import FetchFailure, FetchInit, FetchSuccess, RemoveItem, ResultAccumulator
from core.sorting import apply_sort, toggle_sort_key
from core.urls import decode_term, encode_query

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "search"


class Storage(Protocol):
    def load_string(self, key: str) -> Optional[str]: ...

    def save_string(self, key: str, value: str) -> None: ...


class SearchSession:
    """Interactive search state for one user.

    Args:
        transport: Object with ``async fetch(url) -> FetchPage``.
        storage: Object with ``load_string``/``save_string``; seeds the term.
        base_url: Search API base the query URLs are built against.
        storage_key: Key the search term is persisted under.
        history_size: Number of previous searches offered as shortcuts.
    """

    def __init__(
        self,
        transport: Transport,
        storage: Storage,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        storage_key: str = DEFAULT_STORAGE_KEY,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self.transport = transport
        self.storage = storage
        self.base_url = base_url
        self.storage_key = storage_key
        self.history_size = history_size

        self._search_term = storage.load_string(storage_key) or ""
        self._query_log: list[Query] = []
        self._results = ResultAccumulator()
        self._sort = SortSpec()

    # ── State ──────────────────────────────────────────────────────────────

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def query_log(self) -> tuple[Query, ...]:
        return tuple(self._query_log)

    @property
    def result_state(self) -> ResultState:
        return self._results.state

    @property
    def sort(self) -> SortSpec:
        return self._sort

    @property
    def search_history(self) -> list[str]:
        return recent_searches(self._query_log, self.history_size)

    def view(self) -> SessionView:
        """Snapshot of everything the view renderer consumes."""
        state = self._results.state
        return SessionView(
            search_term=self._search_term,
            items=apply_sort(state.items, self._sort),
            search_history=self.search_history,
            is_loading=state.is_loading,
            is_error=state.is_error,
            current_page=state.current_page,
            has_more=state.current_page + 1 < state.page_count,
            sort=self._sort,
        )

    # ── Intents ────────────────────────────────────────────────────────────

    def set_search_term(self, text: str) -> None:
        """Update and persist the search term without searching."""
        self._search_term = text
        self.storage.save_string(self.storage_key, text)

    async def submit_search(self) -> None:
        """Search for the current term from the first page.

        Blank terms are ignored, as is a repeat of the latest query unless
        that query failed.
        """
        term = self._search_term.strip()
        if not term:
            logger.debug("Ignoring blank search")
            return

        query = Query(search_term=term, page=0)
        if self._is_redundant(query):
            logger.debug("Ignoring redundant search for %r", term)
            return
        await self._issue(query)

    async def select_from_history(self, term: str) -> None:
        self.set_search_term(term)
        await self.submit_search()

    async def load_more(self) -> None:
        """Fetch the next page of the latest query's results."""
        if self._results.state.is_loading or not self._query_log:
            return
        term = decode_term(self._url(self._query_log[-1]), self.base_url)
        await self._issue(
            Query(search_term=term, page=self._results.state.current_page + 1)
        )

    def remove_item(self, item_id: str) -> None:
        self._results.dispatch(RemoveItem(item_id=str(item_id)))

    def sort_by(self, key: Union[SortKey, str]) -> None:
        """Sort by *key*, or flip the direction if it is already active.

        Raises:
            ValueError: If *key* is not a known sort key.
        """
        self._sort = toggle_sort_key(self._sort, SortKey(key))

    async def start(self) -> None:
        """Run the initial search for a remembered term, if there is one."""
        await self.submit_search()

    # ── Fetch lifecycle ────────────────────────────────────────────────────

    def _url(self, query: Query) -> str:
        return encode_query(query, self.base_url)

    def _is_redundant(self, query: Query) -> bool:
        if not self._query_log or self._results.state.is_error:
            return False
        return self._url(self._query_log[-1]) == self._url(query)

    async def _issue(self, query: Query) -> None:
        url = self._url(query)
        self._query_log.append(query)
        logger.info("Search term=%r page=%d", query.search_term, query.page)
        await self._fetch(query, url)

    async def _fetch(self, query: Query, url: str) -> None:
        self._results.dispatch(FetchInit())
        try:
            page = await self.transport.fetch(url)
        except TransportError as exc:
            if self._is_current(query):
                logger.warning("Search failed for %s: %s", url, exc)
                self._results.dispatch(FetchFailure(error=str(exc)))
            else:
                logger.warning("Discarding stale failure for %s: %s", url, exc)
            return

        if not self._is_current(query):
            logger.warning("Discarding stale response for %s", url)
            return

        # Replace vs append follows the requested page, not the echoed one.
        if page.page != query.page:
            page = page.model_copy(update={"page": query.page})
        self._results.dispatch(FetchSuccess(payload=page))

    def _is_current(self, query: Query) -> bool:
        return bool(self._query_log) and self._query_log[-1] is query
