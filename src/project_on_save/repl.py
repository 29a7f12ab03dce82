"""Interactive REPL front end for development and manual use."""

from __future__ import annotations

import asyncio
import logging
import shlex
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING

from project_on_save.output import buffer_name_for

if TYPE_CHECKING:
    from project_on_save.core import ProjectOnSave
    from project_on_save.editor.base import Document

logger = logging.getLogger(__name__)

HELP = """\
Commands:
  open PATH          visit a file and make it current
  close              close the current document
  append TEXT        append a line to the current document
  save               save the current document (runs the on-save hook)
  register COMMAND   set the on-save command for the current document
  unregister         clear the on-save command
  show               show the registered command
  mode on|off        arm/disarm the on-save hook for the current document
  global on|off      arm/disarm the hook for every document
  buffers            list open documents and output buffers
  output [NAME]      print an output buffer (default: current project's)
  messages           print the message log
  help               this text
  exit               quit
"""


class Repl:
    """Reads commands from stdin, drives a ProjectOnSave session."""

    def __init__(self, app: ProjectOnSave) -> None:
        self.app = app
        self.current: Document | None = None
        self._running = False

    async def start(self) -> None:
        self._running = True
        loop = asyncio.get_event_loop()

        print("project-on-save (type 'help' for commands, 'exit' to quit)")
        print("-" * 48)

        while self._running:
            try:
                line = await loop.run_in_executor(None, self._read_input)
            except (EOFError, KeyboardInterrupt):
                print()
                break

            if line is None:
                break
            try:
                if not await self.handle(line):
                    break
            except Exception:
                logger.exception("Command failed: %s", line)

        await self.app.stop()

    def _read_input(self) -> str | None:
        try:
            sys.stdout.write("\n> ")
            sys.stdout.flush()
            raw = sys.stdin.buffer.readline()
            if not raw:
                return None
            return raw.decode("utf-8", errors="replace").rstrip("\n")
        except EOFError:
            return None

    async def stop(self) -> None:
        self._running = False

    async def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the session should end."""
        text = line.strip()
        if not text:
            return True

        name, _, rest = text.partition(" ")
        name = name.lower()
        rest = rest.strip()

        if name in ("exit", "quit"):
            return False
        if name == "help":
            print(HELP)
        elif name == "open":
            if not rest:
                print("Usage: open PATH")
            else:
                self.current = self.app.open(shlex.split(rest)[0])
                print(f"Visiting {self.current.path}")
        elif name == "buffers":
            self._print_buffers()
        elif name == "messages":
            for message in self.app.workspace.messages:
                print(message)
        elif name == "output":
            self._print_output(rest)
        elif name == "global":
            self._toggle(rest, self.app.global_mode.enable, self.app.global_mode.disable)
        else:
            document = self.current
            if document is None or not document.live:
                print("No current document. Use: open PATH")
                return True
            await self._document_command(name, rest, document)
        return True

    async def _document_command(self, name: str, rest: str, document: Document) -> None:
        if name == "register":
            if not rest:
                print("Usage: register COMMAND")
                return
            self.app.register(document, rest)
        elif name == "unregister":
            self.app.unregister(document)
        elif name == "show":
            self.app.show_registered(document)
        elif name == "append":
            document.point = len(document.text)
            document.insert(rest + "\n")
        elif name == "save":
            await self.app.save(document)
            print(f"Wrote {document.path}")
        elif name == "mode":
            self._toggle(
                rest,
                lambda: self.app.enable(document),
                lambda: self.app.disable(document),
            )
        elif name == "close":
            self.app.close(document)
            self.current = None
        else:
            print(f"Unknown command: {name} (type 'help')")

    def _toggle(self, arg: str, on: Callable[[], None], off: Callable[[], None]) -> None:
        arg = arg.lower()
        if arg == "on":
            on()
        elif arg == "off":
            off()
        else:
            print("Usage: on|off")

    def _print_buffers(self) -> None:
        for document in self.app.workspace.documents:
            marker = "*" if document is self.current else " "
            armed = " [on-save]" if self.app.mode.is_enabled(document) else ""
            print(f"{marker} {document.path}{armed}")
        for name in self.app.buffers.names():
            print(f"  {name}")

    def _print_output(self, name: str) -> None:
        if not name:
            root = None
            if self.current is not None:
                root = self.app.registry.context(self.current).project_root
            if root is None:
                print("Usage: output NAME")
                return
            name = buffer_name_for(root)
        buffer = self.app.buffers.get(name)
        if buffer is None:
            print(f"No output buffer named {name}")
        else:
            print(buffer.text, end="")
