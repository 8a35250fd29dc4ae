"""Query URL encoding and decoding.

URLs take the form the search API expects::

    <base>/search?query=<term>&page=<page>

The term is written as-is (no percent-encoding). Decoding reads the page
from the *last* ``&page=`` so terms containing ``&``, ``?`` or whitespace
round-trip without corrupting the page number.
"""

from __future__ import annotations

import logging
import re

from config.settings import DEFAULT_API_BASE_URL
from core.errors import MalformedQuery
from core.models import Query

logger = logging.getLogger(__name__)

SEARCH_PATH = "/search"
PARAM_SEARCH = "query="
PARAM_PAGE = "page="

_PAGE_SUFFIX = re.compile(r"&page=(\d+)\Z")


def _prefix(base_url: str) -> str:
    return f"{base_url.rstrip('/')}{SEARCH_PATH}?{PARAM_SEARCH}"


def encode_url(term: str, page: int = 0, base_url: str = DEFAULT_API_BASE_URL) -> str:
    """Build the request URL for *term* at *page*.

    Raises:
        ValueError: If *page* is negative.
    """
    if page < 0:
        raise ValueError(f"page must be non-negative, got {page}")
    return f"{_prefix(base_url)}{term.strip()}&{PARAM_PAGE}{page}"


def encode_query(query: Query, base_url: str = DEFAULT_API_BASE_URL) -> str:
    """Shorthand for ``encode_url(query.search_term, query.page)``."""
    return encode_url(query.search_term, query.page, base_url)


def parse_url(url: str, base_url: str = DEFAULT_API_BASE_URL) -> Query:
    """Decode *url* back into the ``Query`` that produced it.

    Raises:
        MalformedQuery: If *url* was not built by :func:`encode_url`.
    """
    prefix = _prefix(base_url)
    if not isinstance(url, str) or not url.startswith(prefix):
        raise MalformedQuery(f"not a search URL: {url!r}")

    rest = url[len(prefix):]
    match = _PAGE_SUFFIX.search(rest)
    if match is None:
        raise MalformedQuery(f"missing page parameter: {url!r}")

    return Query(search_term=rest[:match.start()], page=int(match.group(1)))


def decode_term(url: str, base_url: str = DEFAULT_API_BASE_URL) -> str:
    """Return the search term encoded in *url*, or ``""`` if it is malformed."""
    try:
        return parse_url(url, base_url).search_term
    except MalformedQuery as exc:
        logger.debug("Treating malformed URL as empty term: %s", exc)
        return ""

