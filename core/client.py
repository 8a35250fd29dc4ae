"""Transports that turn a search URL into a page of stories.

``StoryClient`` talks to the Hacker News Algolia API over httpx.
``InMemoryTransport`` serves a fixed story list for offline use and tests.
Both raise ``TransportError`` on any failure; one attempt per request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Optional, Protocol

import httpx
from pydantic import ValidationError

from config.settings import DEFAULT_API_BASE_URL
from core.errors import MalformedQuery, TransportError
from core.models import FetchPage, ResultItem
from core.urls import parse_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

#: Demo data served by ``InMemoryTransport`` when running offline.
DEMO_STORIES: list[dict] = [
    {
        "title": "React",
        "url": "https://reactjs.org",
        "author": "Jordan Walke",
        "num_comments": 3,
        "points": 4,
        "objectID": 0,
    },
    {
        "title": "Redux",
        "url": "https://redux.js.org",
        "author": "Dan Abramov, Andrew Clark",
        "num_comments": 2,
        "points": 5,
        "objectID": 1,
    },
    {
        "title": "PHP",
        "url": "https://php.net",
        "author": "Rasmus Lerdorf",
        "num_comments": 10,
        "points": 10,
        "objectID": 2,
    },
]


class Transport(Protocol):
    async def fetch(self, url: str) -> FetchPage: ...


def parse_payload(payload: object) -> FetchPage:
    """Convert a decoded API response body into a ``FetchPage``.

    Raises:
        TransportError: If the body is not a search response.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("hits"), list):
        raise TransportError("Search response has no 'hits' list")
    try:
        return FetchPage(
            items=[ResultItem.model_validate(hit) for hit in payload["hits"]],
            page=payload.get("page") or 0,
            page_count=payload.get("nbPages") or 0,
        )
    except ValidationError as exc:
        raise TransportError(f"Malformed search response: {exc}") from exc


class StoryClient:
    """Thin async client around the story search endpoint.

    An ``httpx.AsyncClient`` may be injected (tests pass one built on
    ``httpx.MockTransport``); otherwise a short-lived client is opened per
    request so the transport is not bound to a single event loop.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.timeout = timeout
        self._client = client

    async def fetch(self, url: str) -> FetchPage:
        """GET *url* and decode the response.

        Raises:
            TransportError: On network errors, non-2xx statuses or bad bodies.
        """
        logger.info("Fetching %s", url)
        try:
            if self._client is not None:
                response = await self._client.get(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"Search API returned {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Search request failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"Search response is not JSON: {exc}") from exc

        return parse_payload(payload)


class InMemoryTransport:
    """Serves *stories* filtered by title, one page per request.

    Args:
        stories: Raw API-shaped hits to serve.
        page_size: Hits per page.
        delay: Seconds to sleep before answering, to mimic a slow network.
        base_url: Base URL the session encodes queries against.
    """

    def __init__(
        self,
        stories: Iterable[dict] = DEMO_STORIES,
        *,
        page_size: int = 20,
        delay: float = 0.0,
        base_url: str = DEFAULT_API_BASE_URL,
    ) -> None:
        self.stories = list(stories)
        self.page_size = page_size
        self.delay = delay
        self.base_url = base_url
        self.fail = False
        self.requested: list[str] = []

    async def fetch(self, url: str) -> FetchPage:
        self.requested.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise TransportError(f"Simulated failure for {url}")

        try:
            query = parse_url(url, self.base_url)
        except MalformedQuery as exc:
            raise TransportError(str(exc)) from exc

        needle = query.search_term.lower()
        hits = [s for s in self.stories if needle in (s.get("title") or "").lower()]
        start = query.page * self.page_size
        page_count = -(-len(hits) // self.page_size)
        return parse_payload(
            {
                "hits": hits[start:start + self.page_size],
                "page": query.page,
                "nbPages": page_count,
            }
        )
