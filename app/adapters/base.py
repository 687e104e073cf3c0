"""Abstract ports the keyboard controller drives.

Swap the system clipboard/browser for in-memory fakes (tests) or a real UI
toolkit by implementing these interfaces.
"""

from abc import ABC, abstractmethod


class ClipboardError(Exception):
    """Writing to the clipboard failed (no backend, permission denied, ...)."""


class ClipboardAdapter(ABC):
    @abstractmethod
    async def write_text(self, text: str) -> None:
        """Place ``text`` on the clipboard. Raises ClipboardError on failure."""


class BrowserAdapter(ABC):
    @abstractmethod
    def open_url(self, url: str) -> None:
        """Open an external URL in a new browser context."""

    @abstractmethod
    def navigate(self, path: str) -> None:
        """Navigate the current view to an in-app path such as /skill/{slug}."""


class SearchFieldAdapter(ABC):
    @abstractmethod
    def focus(self) -> None:
        """Move input focus to the search field."""

    @abstractmethod
    def blur(self) -> None:
        """Remove input focus from the search field."""
