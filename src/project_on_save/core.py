"""ProjectOnSave, the hub that wires the on-save pieces together.

Responsibilities:
1. Own the workspace (documents + lifecycle events)
2. Build resolver, registry, dispatcher and both modes from one config
3. Expose the user-facing actions (register / unregister / show, mode toggles)
4. Drop per-document state when a document is closed
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from project_on_save.config import OnSaveConfig
from project_on_save.dispatcher import CommandDispatcher, CompletionCallback
from project_on_save.editor.base import Document
from project_on_save.editor.workspace import Workspace
from project_on_save.mode import GlobalOnSaveMode, OnSaveMode
from project_on_save.output import OutputBuffers
from project_on_save.project import MarkerRootResolver, ProjectRootResolver
from project_on_save.registry import CommandRegistry

logger = logging.getLogger(__name__)


class ProjectOnSave:
    """Core orchestrator, one per editor session."""

    def __init__(
        self,
        config: OnSaveConfig | None = None,
        *,
        resolver: ProjectRootResolver | None = None,
        echo: Callable[[str], None] | None = None,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        self.config = config or OnSaveConfig()
        self.workspace = Workspace(echo=echo)
        self.resolver = resolver or MarkerRootResolver(self.config.root_markers)
        self.buffers = OutputBuffers()
        self.registry = CommandRegistry(self.workspace)
        self.dispatcher = CommandDispatcher(
            self.config,
            self.resolver,
            self.workspace,
            buffers=self.buffers,
            on_complete=on_complete,
        )
        self.mode = OnSaveMode(self.workspace, self.registry, self.dispatcher)
        self.global_mode = GlobalOnSaveMode(self.workspace, self.mode)
        self.workspace.add_close_listener(self.mode.forget)

        if self.config.global_mode:
            self.global_mode.enable()

    # ── Documents ─────────────────────────────────────────────

    def open(self, path: Path | str) -> Document:
        return self.workspace.open(path)

    async def save(self, document: Document) -> None:
        await self.workspace.save(document)

    def close(self, document: Document) -> None:
        self.workspace.close(document)

    # ── User-facing actions ───────────────────────────────────

    def register(self, document: Document, command: str) -> None:
        self.registry.register(document, command)

    def unregister(self, document: Document) -> None:
        self.registry.unregister(document)

    def show_registered(self, document: Document) -> str | None:
        return self.registry.show_registered(document)

    def enable(self, document: Document) -> None:
        self.mode.enable(document)

    def disable(self, document: Document) -> None:
        self.mode.disable(document)

    # ── Lifecycle ─────────────────────────────────────────────

    async def stop(self) -> None:
        """Wait for background runs, then close every document."""
        if self.dispatcher.pending:
            logger.info("Waiting for %d background run(s)", self.dispatcher.pending)
        await self.dispatcher.wait_idle()
        for document in self.workspace.documents:
            self.workspace.close(document)
