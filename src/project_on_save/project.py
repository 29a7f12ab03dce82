"""Project root resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from project_on_save.config import DEFAULT_ROOT_MARKERS

logger = logging.getLogger(__name__)


@runtime_checkable
class ProjectRootResolver(Protocol):
    """Anything that can map a file to its enclosing project directory."""

    def resolve_root(self, path: Path) -> Path | None: ...


class MarkerRootResolver:
    """Walk up from a file, return the nearest directory holding a root marker."""

    def __init__(self, markers: Iterable[str] | None = None) -> None:
        self.markers = list(markers) if markers is not None else list(DEFAULT_ROOT_MARKERS)

    def resolve_root(self, path: Path) -> Path | None:
        p = Path(path).expanduser().resolve()
        if not p.is_dir():
            p = p.parent
        while True:
            if any((p / marker).exists() for marker in self.markers):
                logger.debug("Project root for %s: %s", path, p)
                return p
            if p == p.parent:
                break
            p = p.parent
        logger.debug("No project root for %s", path)
        return None
