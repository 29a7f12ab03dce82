"""Document model, save events and the event-source protocol."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# Undecodable bytes round-trip unchanged between disk and text
FILE_ERRORS = "surrogateescape"


@dataclass(eq=False)
class Document:
    """An open file buffer.

    ``point`` is the cursor offset and ``scroll`` the offset of the first
    visible character, both counted in characters of ``text``.
    """

    path: Path
    text: str = ""
    point: int = 0
    scroll: int = 0
    live: bool = True
    modified: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    def insert(self, text: str) -> None:
        """Insert text at point and move point past it."""
        self.text = self.text[: self.point] + text + self.text[self.point :]
        self.point += len(text)
        self.modified = True

    def set_text(self, text: str) -> None:
        self.text = text
        self.point = min(self.point, len(text))
        self.scroll = min(self.scroll, len(text))
        self.modified = True

    def revert(self) -> bool:
        """Reload text from disk, keeping point and scroll where still valid.

        Returns False without touching anything if the document is closed or
        its file no longer exists.
        """
        if not self.live or not self.path.is_file():
            return False

        point, scroll = self.point, self.scroll
        self.text = self.path.read_text(encoding="utf-8", errors=FILE_ERRORS)
        self.point = min(point, len(self.text))
        self.scroll = min(scroll, len(self.text))
        self.modified = False
        logger.debug("Reverted %s (point=%d, scroll=%d)", self.path, self.point, self.scroll)
        return True


@dataclass
class SaveEvent:
    """Fired after a document has been written to disk."""

    document: Document
    path: Path
    saved_at: datetime = field(default_factory=datetime.now)


# Per-document save hook: OnSaveMode._on_save
SaveListener = Callable[[SaveEvent], Awaitable[None]]

# Workspace-wide open/close hooks
DocumentListener = Callable[[Document], None]


@runtime_checkable
class DocumentEventSource(Protocol):
    """Protocol for anything that emits document lifecycle events."""

    def add_save_listener(self, document: Document, listener: SaveListener) -> None: ...

    def remove_save_listener(self, document: Document, listener: SaveListener) -> None: ...

    def add_open_listener(self, listener: DocumentListener) -> None: ...

    def remove_open_listener(self, listener: DocumentListener) -> None: ...

    @property
    def documents(self) -> list[Document]:
        """Currently open (live) documents."""
        ...

    def message(self, text: str) -> None:
        """Show a notification to the user."""
        ...
