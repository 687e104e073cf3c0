"""Debounced search input with last-write-wins results."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from app.config import settings
from app.utils.debounce import Debouncer

logger = logging.getLogger(__name__)

SearchFetch = Callable[[str, str | None], Awaitable[Sequence[Any]]]
ResultsListener = Callable[[list[Any], str], None]


def filter_key(query: str, tag: str | None) -> str:
    return f"{query}|{tag or ''}"


class SearchSession:
    """Holds the query/tag the user sees and the results that belong to them.

    Typing goes through a debouncer, so a fetch only starts after the query
    has been quiet for ``delay`` seconds. Fetches are never cancelled; a
    result is applied only if it still matches the current query and tag.
    ``results`` is None while nothing has resolved yet (loading), which is
    distinct from an empty list (confirmed no matches). A failed fetch is
    logged and leaves ``results`` as it was, with the exception in ``error``.
    """

    def __init__(
        self,
        fetch: SearchFetch,
        *,
        delay: float | None = None,
        on_results: ResultsListener | None = None,
    ) -> None:
        self._fetch = fetch
        self._on_results = on_results
        self._debouncer = Debouncer(
            self._run, settings.search_debounce_seconds if delay is None else delay
        )
        self.query = ""
        self.tag: str | None = None
        self.results: list[Any] | None = None
        self.error: Exception | None = None  # last failed fetch for the current query

    @property
    def filter_key(self) -> str:
        return filter_key(self.query, self.tag)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def type_query(self, query: str) -> None:
        self.query = query
        self._debouncer(query, self.tag)

    async def set_tag(self, tag: str | None) -> None:
        """Tag chips apply immediately; any half-typed query timer is dropped."""
        self._debouncer.cancel()
        self.tag = tag or None
        await self._run(self.query, self.tag)

    async def clear(self) -> None:
        self._debouncer.cancel()
        self.query = ""
        self.tag = None
        await self._run("", None)

    async def settle(self) -> None:
        """Wait until the pending debounce timer and its fetch have finished."""
        await self._debouncer.drain()

    def close(self) -> None:
        self._debouncer.cancel()

    async def _run(self, query: str, tag: str | None) -> None:
        try:
            results = list(await self._fetch(query, tag))
        except Exception as exc:
            logger.warning("Search for %r failed: %s", filter_key(query, tag), exc)
            if (query, tag) == (self.query, self.tag):
                self.error = exc
            return
        if (query, tag) != (self.query, self.tag):
            logger.debug("Dropping stale results for %r", filter_key(query, tag))
            return
        self.results = results
        self.error = None
        if self._on_results:
            self._on_results(results, filter_key(query, tag))
