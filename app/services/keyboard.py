"""Keyboard shortcuts over the visible skill list.

``reduce`` is a pure event-in/state-out function; ``KeyboardController``
performs the effects it returns through the adapter ports.

Shortcuts:
    /          focus search (not while typing)
    Escape     clear query and blur search (always)
    c          copy the selected skill's install command
    g          open the selected skill's repository
    ArrowUp    previous skill, wrapping to the last
    ArrowDown  next skill, wrapping to the first
    Enter      open the selected skill's detail page
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, NamedTuple

from app.adapters.base import BrowserAdapter, ClipboardAdapter, ClipboardError, SearchFieldAdapter
from app.config import settings
from app.schemas.agent import DEFAULT_AGENT, AgentType
from app.services.commands import resolve_command

logger = logging.getLogger(__name__)

_TYPING_TARGETS = frozenset({"input", "textarea"})


@dataclass(frozen=True)
class KeyEvent:
    key: str
    target: str = "body"  # tag name of the focused element
    content_editable: bool = False


def is_typing(event: KeyEvent) -> bool:
    return event.target.lower() in _TYPING_TARGETS or event.content_editable


# ── Effects ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FocusSearch:
    pass


@dataclass(frozen=True)
class BlurSearch:
    pass


@dataclass(frozen=True)
class ClearQuery:
    pass


@dataclass(frozen=True)
class CopyCommand:
    text: str
    slug: str
    agent: AgentType


@dataclass(frozen=True)
class OpenUrl:
    url: str
    slug: str


@dataclass(frozen=True)
class Navigate:
    path: str


Effect = FocusSearch | BlurSearch | ClearQuery | CopyCommand | OpenUrl | Navigate


# ── State ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SelectionState:
    skills: tuple[Any, ...] = ()
    selected_index: int = 0
    selected_agent: AgentType = DEFAULT_AGENT
    filter_key: str = ""

    @property
    def selected(self) -> Any | None:
        if 0 <= self.selected_index < len(self.skills):
            return self.skills[self.selected_index]
        return None


class Transition(NamedTuple):
    state: SelectionState
    effects: tuple[Effect, ...]
    handled: bool  # True → the caller should preventDefault


def with_skills(
    state: SelectionState, skills: Sequence[Any], filter_key: str | None = None
) -> SelectionState:
    """Swap in a new visible list.

    The selection goes back to 0 when the filter changed or when the list
    shrank below the current index.
    """
    key = state.filter_key if filter_key is None else filter_key
    index = state.selected_index
    if key != state.filter_key or index >= len(skills) or index < 0:
        index = 0
    return replace(state, skills=tuple(skills), selected_index=index, filter_key=key)


def with_agent(state: SelectionState, agent: AgentType) -> SelectionState:
    return replace(state, selected_agent=agent)


def reduce(state: SelectionState, event: KeyEvent) -> Transition:
    key = event.key
    if key == "Escape":
        return Transition(state, (BlurSearch(), ClearQuery()), True)

    if is_typing(event):
        return Transition(state, (), False)

    if key == "/":
        return Transition(state, (FocusSearch(),), True)

    count = len(state.skills)
    if key in ("ArrowUp", "ArrowDown"):
        if count == 0:
            return Transition(state, (), True)
        step = -1 if key == "ArrowUp" else 1
        index = (state.selected_index + step + count) % count
        return Transition(replace(state, selected_index=index), (), True)

    if key not in ("c", "g", "Enter"):
        return Transition(state, (), False)

    skill = state.selected
    if skill is None:
        return Transition(state, (), True)
    if key == "c":
        command = resolve_command(skill, state.selected_agent)
        effect: Effect = CopyCommand(command, skill.slug, state.selected_agent)
    elif key == "g":
        effect = OpenUrl(skill.repo_url, skill.slug)
    else:
        effect = Navigate(f"/skill/{skill.slug}")
    return Transition(state, (effect,), True)


# ── Runtime ────────────────────────────────────────────────────────

KeyListener = Callable[[KeyEvent], Awaitable[bool]]


class KeyEventSource:
    """Global keydown dispatcher (the window, in browser terms)."""

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def dispatch(self, event: KeyEvent) -> bool:
        """Deliver ``event``; returns True if any listener prevented the default."""
        prevented = False
        for listener in list(self._listeners):
            prevented = await listener(event) or prevented
        return prevented


class CopiedIndicator:
    """'Copied!' flag that reverts on its own after ``duration`` seconds."""

    def __init__(self, duration: float | None = None) -> None:
        self.duration = settings.copied_indicator_seconds if duration is None else duration
        self.copied = False
        self._handle: asyncio.TimerHandle | None = None

    def trigger(self) -> None:
        self.cancel()
        self.copied = True
        self._handle = asyncio.get_running_loop().call_later(self.duration, self._reset)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _reset(self) -> None:
        self.copied = False
        self._handle = None


@dataclass
class KeyboardController:
    clipboard: ClipboardAdapter
    browser: BrowserAdapter
    search_field: SearchFieldAdapter
    on_copy: Callable[[CopyCommand], None] | None = None
    on_clear: Callable[[], None] | None = None
    state: SelectionState = field(default_factory=SelectionState)
    _source: KeyEventSource | None = field(default=None, init=False, repr=False)

    def attach(self, source: KeyEventSource) -> None:
        self.close()
        source.add_listener(self.handle_key)
        self._source = source

    def close(self) -> None:
        if self._source is not None:
            self._source.remove_listener(self.handle_key)
            self._source = None

    def update_skills(self, skills: Sequence[Any], filter_key: str | None = None) -> None:
        self.state = with_skills(self.state, skills, filter_key)

    def select_agent(self, agent: AgentType) -> None:
        self.state = with_agent(self.state, agent)

    async def handle_key(self, event: KeyEvent) -> bool:
        transition = reduce(self.state, event)
        self.state = transition.state
        for effect in transition.effects:
            await self._perform(effect)
        return transition.handled

    async def _perform(self, effect: Effect) -> None:
        if isinstance(effect, FocusSearch):
            self.search_field.focus()
        elif isinstance(effect, BlurSearch):
            self.search_field.blur()
        elif isinstance(effect, ClearQuery):
            if self.on_clear:
                self.on_clear()
        elif isinstance(effect, CopyCommand):
            try:
                await self.clipboard.write_text(effect.text)
            except ClipboardError as exc:
                logger.warning("Failed to copy %s: %s", effect.slug, exc)
                return
            if self.on_copy:
                self.on_copy(effect)
        elif isinstance(effect, OpenUrl):
            self.browser.open_url(effect.url)
        elif isinstance(effect, Navigate):
            self.browser.navigate(effect.path)
