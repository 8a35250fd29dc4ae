"""Builders for stories in model and raw API-hit form."""

from __future__ import annotations

from core.models import ResultItem


def make_item(item_id, title="story", author="someone", comments=0, score=0) -> ResultItem:
    return ResultItem(
        id=str(item_id),
        title=title,
        url=f"https://example.com/{item_id}",
        author=author,
        comment_count=comments,
        score=score,
    )


def make_hit(item_id, title="story", **extra) -> dict:
    hit = {
        "objectID": str(item_id),
        "title": title,
        "url": f"https://example.com/{item_id}",
        "author": "someone",
        "num_comments": 0,
        "points": 0,
    }
    hit.update(extra)
    return hit
