"""In-process workspace: open documents, save them, and fan out lifecycle events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from project_on_save.editor.base import (
    FILE_ERRORS,
    Document,
    DocumentListener,
    SaveEvent,
    SaveListener,
)

logger = logging.getLogger(__name__)


class Workspace:
    """Holds the open documents and acts as their event source."""

    def __init__(self, echo: Callable[[str], None] | None = None) -> None:
        self._documents: dict[Path, Document] = {}
        self._save_listeners: dict[int, list[SaveListener]] = {}  # id(document) → hooks
        self._open_listeners: list[DocumentListener] = []
        self._close_listeners: list[DocumentListener] = []
        self._echo = echo
        self.messages: list[str] = []

    @property
    def documents(self) -> list[Document]:
        return list(self._documents.values())

    # ── Document lifecycle ────────────────────────────────────

    def open(self, path: Path | str) -> Document:
        """Visit a file, reusing the live document if it is already open."""
        path = Path(path).expanduser().resolve()
        existing = self._documents.get(path)
        if existing is not None:
            return existing

        text = path.read_text(encoding="utf-8", errors=FILE_ERRORS) if path.is_file() else ""
        document = Document(path=path, text=text)
        self._documents[path] = document
        logger.info("Opened %s", path)

        for listener in list(self._open_listeners):
            listener(document)
        return document

    async def save(self, document: Document) -> None:
        """Write the document to disk, then run its save hooks in order."""
        if not document.live:
            raise RuntimeError(f"Cannot save closed document: {document.path}")

        document.path.parent.mkdir(parents=True, exist_ok=True)
        document.path.write_text(document.text, encoding="utf-8", errors=FILE_ERRORS)
        document.modified = False
        logger.debug("Saved %s (%d chars)", document.path, len(document.text))

        event = SaveEvent(document=document, path=document.path)
        for listener in list(self._save_listeners.get(id(document), [])):
            await listener(event)

    def close(self, document: Document) -> None:
        if not document.live:
            return
        document.live = False
        self._documents.pop(document.path, None)
        self._save_listeners.pop(id(document), None)
        logger.info("Closed %s", document.path)

        for listener in list(self._close_listeners):
            listener(document)

    # ── Listener registration ─────────────────────────────────

    def add_save_listener(self, document: Document, listener: SaveListener) -> None:
        hooks = self._save_listeners.setdefault(id(document), [])
        if listener not in hooks:
            hooks.append(listener)

    def remove_save_listener(self, document: Document, listener: SaveListener) -> None:
        hooks = self._save_listeners.get(id(document), [])
        if listener in hooks:
            hooks.remove(listener)

    def add_open_listener(self, listener: DocumentListener) -> None:
        if listener not in self._open_listeners:
            self._open_listeners.append(listener)

    def remove_open_listener(self, listener: DocumentListener) -> None:
        if listener in self._open_listeners:
            self._open_listeners.remove(listener)

    def add_close_listener(self, listener: DocumentListener) -> None:
        if listener not in self._close_listeners:
            self._close_listeners.append(listener)

    # ── User-facing messages ──────────────────────────────────

    def message(self, text: str) -> None:
        self.messages.append(text)
        logger.info("%s", text)
        if self._echo:
            self._echo(text)
