"""Browse runtime — wires the search session, keyboard shortcuts and adapters.

Search results feed the keyboard controller's visible list, Escape clears the
session, and a successful copy flips the "Copied!" indicator. Without explicit
adapters the desktop clipboard and browser are used.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from app.adapters.base import BrowserAdapter, ClipboardAdapter, SearchFieldAdapter
from app.adapters.system import SystemBrowser, SystemClipboard
from app.schemas.skill import SkillResponse
from app.services.keyboard import CopiedIndicator, CopyCommand, KeyboardController, KeyEventSource
from app.services.search_session import SearchFetch, SearchSession

logger = logging.getLogger(__name__)


def api_search(client: httpx.AsyncClient) -> SearchFetch:
    """Search fetch backed by a running API's ``GET /api/skills/search``."""

    async def fetch(query: str, tag: str | None) -> list[SkillResponse]:
        params = {"q": query}
        if tag:
            params["tag"] = tag
        resp = await client.get("/api/skills/search", params=params)
        resp.raise_for_status()
        return [SkillResponse.model_validate(item) for item in resp.json()]

    return fetch


@dataclass
class BrowseSession:
    search: SearchSession
    keyboard: KeyboardController
    indicator: CopiedIndicator
    _tasks: set[asyncio.Task] = field(default_factory=set, repr=False)

    def _on_copy(self, effect: CopyCommand) -> None:
        logger.info("Copied install command for %s (%s)", effect.slug, effect.agent)
        self.indicator.trigger()

    def _on_clear(self) -> None:
        task = asyncio.get_running_loop().create_task(self.search.clear())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def settle(self) -> None:
        """Wait for pending searches, including ones started by Escape."""
        await self.search.settle()
        if self._tasks:
            await asyncio.gather(*self._tasks)

    def close(self) -> None:
        self.keyboard.close()
        self.search.close()
        self.indicator.cancel()


def open_browse_session(
    fetch: SearchFetch,
    search_field: SearchFieldAdapter,
    source: KeyEventSource,
    *,
    clipboard: ClipboardAdapter | None = None,
    browser: BrowserAdapter | None = None,
    delay: float | None = None,
) -> BrowseSession:
    keyboard = KeyboardController(
        clipboard=clipboard or SystemClipboard(),
        browser=browser or SystemBrowser(),
        search_field=search_field,
    )
    search = SearchSession(fetch, delay=delay, on_results=keyboard.update_skills)
    session = BrowseSession(search=search, keyboard=keyboard, indicator=CopiedIndicator())
    keyboard.on_copy = session._on_copy
    keyboard.on_clear = session._on_clear
    keyboard.attach(source)
    return session
