"""Command dispatcher. Runs a registered command in the document's project root.

Four execution modes, picked from the config at call time:

- async, silent:       background process, output discarded
- async, show output:  background process, output streamed into the project's buffer
- sync, silent:        blocking shell call, output discarded, "exited with code N" message
- sync, show output:   blocking shell call, "running"/"finished" messages

Both sync modes reload the document from disk afterwards so in-place
formatters show up in the open buffer. ``OnSaveConfig.timeout`` is not
applied to either mode. Overlapping async runs are not serialized.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Union

from project_on_save.output import OutputBuffer, OutputBuffers, buffer_name_for

if TYPE_CHECKING:
    from project_on_save.config import OnSaveConfig
    from project_on_save.editor.base import Document, DocumentEventSource
    from project_on_save.project import ProjectRootResolver
    from project_on_save.registry import OnSaveContext

logger = logging.getLogger(__name__)

_READ_CHUNK = 65536


@dataclass
class SyncResult:
    """Outcome of a blocking run."""

    command: str
    cwd: Path
    returncode: int
    reverted: bool = False


@dataclass
class AsyncRun:
    """Handle on a background run. ``task`` owns the process until it exits."""

    command: str
    cwd: Path
    process: asyncio.subprocess.Process
    output: OutputBuffer | None = None
    task: asyncio.Task | None = None

    @property
    def pid(self) -> int:
        return self.process.pid

    async def wait(self) -> int:
        if self.task is None:
            return await self.process.wait()
        return await self.task


CommandRun = Union[SyncResult, AsyncRun]

# Called once a background process has exited
CompletionCallback = Callable[[AsyncRun, int], None]


def format_header(command: str, cwd: Path) -> str:
    return f"Command: {command}\nDirectory: {cwd}\n\n"


class CommandDispatcher:
    """Executes commands through the shell with cwd forced to the project root."""

    def __init__(
        self,
        config: OnSaveConfig,
        resolver: ProjectRootResolver,
        events: DocumentEventSource,
        buffers: OutputBuffers | None = None,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.events = events
        self.buffers = buffers if buffers is not None else OutputBuffers()
        self.on_complete = on_complete
        self._tasks: set[asyncio.Task] = set()

    # ── Root resolution ───────────────────────────────────────

    def project_root(self, document: Document, context: OnSaveContext) -> Path | None:
        """Return the cached root, resolving it on first need."""
        if context.project_root is None:
            context.project_root = self.resolver.resolve_root(document.path)
        return context.project_root

    # ── Dispatch ──────────────────────────────────────────────

    async def run_command(
        self, document: Document, context: OnSaveContext
    ) -> CommandRun | None:
        """Run the context's command for a document. Returns None when skipped."""
        command = context.command
        if command is None:
            return None

        root = self.project_root(document, context)
        if root is None:
            logger.debug("No project root for %s, skipping %r", document.path, command)
            return None

        if self.config.run_synchronously:
            return self._run_sync(document, command, root)
        return await self._run_async(command, root)

    def _prepare_buffer(self, command: str, root: Path) -> OutputBuffer:
        buffer = self.buffers.get_or_create(buffer_name_for(root))
        buffer.clear()
        buffer.append(format_header(command, root))
        return buffer

    def _run_sync(self, document: Document, command: str, root: Path) -> SyncResult:
        show = self.config.show_output
        if show:
            buffer = self._prepare_buffer(command, root)
            self.events.message(f"Running on-save command: {command}")
            proc = subprocess.run(
                command,
                shell=True,
                cwd=root,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
            buffer.append(proc.stdout or "")
            self.events.message(f"On-save command finished with exit code {proc.returncode}")
        else:
            proc = subprocess.run(
                command,
                shell=True,
                cwd=root,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
            self.events.message(f"On-save command exited with code {proc.returncode}")
        logger.info("%r exited with code %d (cwd=%s)", command, proc.returncode, root)

        reverted = document.revert()
        return SyncResult(command=command, cwd=root, returncode=proc.returncode, reverted=reverted)

    async def _run_async(self, command: str, root: Path) -> AsyncRun:
        buffer = self._prepare_buffer(command, root) if self.config.show_output else None
        sink = asyncio.subprocess.PIPE if buffer else asyncio.subprocess.DEVNULL

        process = await asyncio.create_subprocess_shell(
            command,
            cwd=root,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=sink,
            stderr=asyncio.subprocess.STDOUT if buffer else asyncio.subprocess.DEVNULL,
        )
        logger.info("Started %r (pid=%d, cwd=%s)", command, process.pid, root)

        run = AsyncRun(command=command, cwd=root, process=process, output=buffer)
        run.task = asyncio.create_task(self._pump(run))
        self._tasks.add(run.task)
        run.task.add_done_callback(self._tasks.discard)
        return run

    async def _pump(self, run: AsyncRun) -> int:
        stdout = run.process.stdout
        if run.output is not None and stdout is not None:
            decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
            while True:
                chunk = await stdout.read(_READ_CHUNK)
                if not chunk:
                    break
                run.output.append(decoder.decode(chunk))
            run.output.append(decoder.decode(b"", final=True))

        returncode = await run.process.wait()
        logger.info("%r (pid=%d) exited with code %d", run.command, run.pid, returncode)
        if self.on_complete:
            self.on_complete(run, returncode)
        return returncode

    # ── Background bookkeeping ────────────────────────────────

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        """Wait for every background run started so far."""
        while self._tasks:
            tasks = list(self._tasks)
            await asyncio.gather(*tasks, return_exceptions=True)
            self._tasks.difference_update(tasks)
