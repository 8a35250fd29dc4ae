"""Exceptions raised by the Story Search core."""

from __future__ import annotations


class TransportError(RuntimeError):
    """A fetch against the search API failed or returned an unusable body."""


class MalformedQuery(ValueError):
    """A URL could not be decoded back into a search query."""


class InvalidAction(TypeError):
    """The result reducer received an action it does not know.

    This signals that the reducer and its callers have drifted out of sync
    and is never recovered from.
    """
