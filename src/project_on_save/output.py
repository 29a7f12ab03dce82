"""Append-only text sinks for command output."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def buffer_name_for(project_root: Path) -> str:
    return f"*on-save: {project_root.name}*"


class OutputBuffer:
    """A named, append-only buffer of process output."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._chunks: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self._chunks)

    def append(self, chunk: str) -> None:
        self._chunks.append(chunk)

    def clear(self) -> None:
        self._chunks.clear()


class OutputBuffers:
    """Output buffers by name; a name maps to one buffer for the session."""

    def __init__(self) -> None:
        self._buffers: dict[str, OutputBuffer] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._buffers

    def get(self, name: str) -> OutputBuffer | None:
        return self._buffers.get(name)

    def names(self) -> list[str]:
        return sorted(self._buffers)

    def get_or_create(self, name: str) -> OutputBuffer:
        buffer = self._buffers.get(name)
        if buffer is None:
            buffer = self._buffers[name] = OutputBuffer(name)
            logger.debug("Created output buffer %s", name)
        return buffer
