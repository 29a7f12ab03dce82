"""Per-document on-save registrations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from project_on_save.editor.base import Document, DocumentEventSource

logger = logging.getLogger(__name__)


@dataclass
class OnSaveContext:
    """Everything the save hook needs for one document."""

    command: str | None = None
    project_root: Path | None = None


class CommandRegistry:
    """Stores at most one command per document and reports changes to the user."""

    def __init__(self, events: DocumentEventSource) -> None:
        self._events = events
        self._contexts: dict[int, OnSaveContext] = {}  # id(document) → context

    def context(self, document: Document) -> OnSaveContext:
        ctx = self._contexts.get(id(document))
        if ctx is None:
            ctx = self._contexts[id(document)] = OnSaveContext()
        return ctx

    def forget(self, document: Document) -> None:
        """Drop a closed document's context."""
        self._contexts.pop(id(document), None)

    def register(self, document: Document, command: str) -> None:
        self.context(document).command = command
        logger.debug("Registered %r for %s", command, document.path)
        self._events.message(f"On-save command set to: {command}")

    def unregister(self, document: Document) -> None:
        self.context(document).command = None
        logger.debug("Unregistered command for %s", document.path)
        self._events.message("On-save command cleared")

    def show_registered(self, document: Document) -> str | None:
        ctx = self._contexts.get(id(document))
        command = ctx.command if ctx else None
        if command is None:
            self._events.message("No on-save command registered")
        else:
            self._events.message(f"On-save command: {command}")
        return command
