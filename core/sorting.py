"""Client-side ordering of the accumulated result list.

Sorting is always a stable ascending sort followed, when requested, by a
reversal of the whole list. That is observably different from a descending
stable sort: items with equal keys swap their relative order on reversal.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from core.models import ResultItem, SortKey, SortSpec

#: Maps each sort key to the field it orders by. Strings compare case-sensitively.
SORT_FIELDS: dict[SortKey, Callable[[ResultItem], Any]] = {
    SortKey.TITLE: lambda item: item.title,
    SortKey.AUTHOR: lambda item: item.author,
    SortKey.COMMENT_COUNT: lambda item: item.comment_count,
    SortKey.SCORE: lambda item: item.score,
}


def apply_sort(items: Sequence[ResultItem], spec: SortSpec) -> list[ResultItem]:
    """Return *items* ordered according to *spec*; *items* is not modified.

    ``SortKey.NONE`` keeps arrival order whatever the direction flag says.

    Examples:
        >>> [i.title for i in apply_sort(items, SortSpec(key=SortKey.TITLE))]
        ['a', 'a', 'b']
    """
    if spec.key == SortKey.NONE:
        return list(items)

    ordered = sorted(items, key=SORT_FIELDS[spec.key])
    if spec.reversed:
        ordered.reverse()
    return ordered


def toggle_sort_key(current: SortSpec, requested: SortKey) -> SortSpec:
    """Flip the direction when *requested* is already active, else switch to it."""
    if requested == current.key:
        return SortSpec(key=current.key, reversed=not current.reversed)
    return SortSpec(key=requested, reversed=False)
