"""
Recent-search shortcuts derived from a session's query log.

The history holds no state of its own: it is recomputed from the log on
every render, so it always agrees with what was actually issued.
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import groupby

from core.models import Query
from core.urls import decode_term, encode_query

DEFAULT_HISTORY_SIZE = 5


def collapse_terms(log: Iterable[Query]) -> list[str]:
    """Return the log's terms with runs of identical consecutive terms merged.

    Each term is read back from the query's URL, the same way the session
    reads the term of the query it is about to page through.
    """
    terms = (decode_term(encode_query(query)) for query in log)
    return [term for term, _ in groupby(terms)]


def recent_searches(log: Iterable[Query], limit: int = DEFAULT_HISTORY_SIZE) -> list[str]:
    """Return up to *limit* previous search terms, oldest first.

    The most recent term is the one currently on screen, so it is left out.

    Args:
        log: The session's query log, in issue order.
        limit: Maximum number of shortcuts to return.

    Returns:
        A list of distinct-from-neighbour, non-empty terms.

    Examples:
        >>> recent_searches([Query(search_term="a"), Query(search_term="a", page=1),
        ...                  Query(search_term="b"), Query(search_term="c"),
        ...                  Query(search_term="d")])
        ['a', 'b', 'c']
    """
    terms = [term for term in collapse_terms(log) if term]
    return terms[-(limit + 1):][:-1]
