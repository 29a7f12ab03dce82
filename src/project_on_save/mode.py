"""Save hook adapter (per document) and its global counterpart."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from project_on_save.dispatcher import CommandDispatcher, CommandRun
    from project_on_save.editor.base import Document, DocumentEventSource, SaveEvent
    from project_on_save.registry import CommandRegistry

logger = logging.getLogger(__name__)


class OnSaveMode:
    """Arms and disarms the on-save hook for individual documents.

    Arming resolves the project root right away. Disarming forgets the root
    but keeps the registered command, so re-arming later picks it up again.
    """

    def __init__(
        self,
        events: DocumentEventSource,
        registry: CommandRegistry,
        dispatcher: CommandDispatcher,
    ) -> None:
        self._events = events
        self._registry = registry
        self._dispatcher = dispatcher
        self._armed: set[int] = set()  # id(document)
        self.last_run: CommandRun | None = None

    def is_enabled(self, document: Document) -> bool:
        return id(document) in self._armed

    def enable(self, document: Document) -> None:
        if self.is_enabled(document):
            return
        context = self._registry.context(document)
        context.project_root = self._dispatcher.resolver.resolve_root(document.path)
        self._events.add_save_listener(document, self._on_save)
        self._armed.add(id(document))
        logger.debug("On-save armed for %s (root=%s)", document.path, context.project_root)

    def disable(self, document: Document) -> None:
        if not self.is_enabled(document):
            return
        self._events.remove_save_listener(document, self._on_save)
        self._registry.context(document).project_root = None
        self._armed.discard(id(document))
        logger.debug("On-save disarmed for %s", document.path)

    def forget(self, document: Document) -> None:
        """Drop state for a document that has been closed."""
        self._armed.discard(id(document))
        self._registry.forget(document)

    async def _on_save(self, event: SaveEvent) -> None:
        context = self._registry.context(event.document)
        if context.command is None:
            return
        self.last_run = await self._dispatcher.run_command(event.document, context)


class GlobalOnSaveMode:
    """Arms ``OnSaveMode`` in every open document and every one opened later."""

    def __init__(self, events: DocumentEventSource, mode: OnSaveMode) -> None:
        self._events = events
        self._mode = mode
        self.enabled = False

    def enable(self) -> None:
        if self.enabled:
            return
        self.enabled = True
        self._events.add_open_listener(self._mode.enable)
        for document in self._events.documents:
            self._mode.enable(document)
        logger.info("Global on-save mode enabled")

    def disable(self) -> None:
        if not self.enabled:
            return
        self.enabled = False
        self._events.remove_open_listener(self._mode.enable)
        for document in self._events.documents:
            self._mode.disable(document)
        logger.info("Global on-save mode disabled")
