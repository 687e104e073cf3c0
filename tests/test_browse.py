"""Browse runtime tests: search results drive the keyboard shortcuts."""

import pytest
from httpx import AsyncClient

from app.adapters.base import BrowserAdapter, ClipboardAdapter, SearchFieldAdapter
from app.adapters.system import SystemBrowser, SystemClipboard
from app.services.browse import api_search, open_browse_session
from app.services.keyboard import KeyEvent, KeyEventSource


class RecordingClipboard(ClipboardAdapter):
    def __init__(self):
        self.texts = []

    async def write_text(self, text: str) -> None:
        self.texts.append(text)


class RecordingBrowser(BrowserAdapter):
    def __init__(self):
        self.opened = []

    def open_url(self, url: str) -> None:
        self.opened.append(url)

    def navigate(self, path: str) -> None:
        self.opened.append(path)


class StubSearchField(SearchFieldAdapter):
    def focus(self) -> None:
        pass

    def blur(self) -> None:
        pass


@pytest.mark.asyncio
async def test_search_results_feed_keyboard_and_copy(client: AsyncClient, catalog):
    source = KeyEventSource()
    clipboard = RecordingClipboard()
    browser = RecordingBrowser()
    session = open_browse_session(
        api_search(client), StubSearchField(), source,
        clipboard=clipboard, browser=browser, delay=0.0,
    )

    session.search.type_query("anthropics")
    await session.settle()
    assert [s.slug for s in session.keyboard.state.skills] == ["frontend-design", "pdf", "mcp-builder"]

    await source.dispatch(KeyEvent("ArrowDown"))
    await source.dispatch(KeyEvent("c"))
    await source.dispatch(KeyEvent("g"))
    assert clipboard.texts == ["npx skills add anthropics/skills --skill pdf"]
    assert browser.opened == ["https://github.com/anthropics/skills"]
    assert session.indicator.copied

    await source.dispatch(KeyEvent("Escape"))
    await session.settle()
    assert session.search.query == ""
    assert session.keyboard.state.selected_index == 0
    assert len(session.keyboard.state.skills) == 4

    session.close()
    assert source.listener_count == 0


@pytest.mark.asyncio
async def test_api_search_passes_tag(client: AsyncClient, catalog):
    fetch = api_search(client)
    results = await fetch("", "frontend")
    assert [s.slug for s in results] == ["frontend-design", "vercel-deploy"]


def test_defaults_to_system_adapters():
    async def fetch(query, tag):
        return []

    session = open_browse_session(fetch, StubSearchField(), KeyEventSource())
    assert isinstance(session.keyboard.clipboard, SystemClipboard)
    assert isinstance(session.keyboard.browser, SystemBrowser)
    session.close()
