"""Configuration loading from environment variables and project-on-save.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_FILENAME = "project-on-save.toml"
_USER_CONFIG_DIR = Path.home() / ".config" / "project-on-save"

DEFAULT_ROOT_MARKERS = [
    ".git",
    ".hg",
    ".svn",
    ".project",
    "pyproject.toml",
    "setup.py",
    "package.json",
    "Cargo.toml",
    "go.mod",
    "Makefile",
]

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


@dataclass
class OnSaveConfig:
    """Process-wide on-save settings, read at dispatch time.

    ``timeout`` is accepted and stored but no execution path enforces it.
    """

    timeout: int = 30
    show_output: bool = True
    run_synchronously: bool = False
    global_mode: bool = False
    root_markers: list[str] = field(default_factory=lambda: list(DEFAULT_ROOT_MARKERS))
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> OnSaveConfig:
    """Load configuration from environment variables and optional project-on-save.toml.

    Priority: environment variables > project-on-save.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.config/project-on-save/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _USER_CONFIG_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    command_data = file_data.get("command", {})

    config = OnSaveConfig(
        timeout=int(os.getenv("PROJECT_ON_SAVE_TIMEOUT", command_data.get("timeout", 30))),
        show_output=_as_bool(
            os.getenv("PROJECT_ON_SAVE_SHOW_OUTPUT", command_data.get("show_output", True))
        ),
        run_synchronously=_as_bool(
            os.getenv(
                "PROJECT_ON_SAVE_RUN_SYNCHRONOUSLY",
                command_data.get("run_synchronously", False),
            )
        ),
        global_mode=_as_bool(
            os.getenv("PROJECT_ON_SAVE_GLOBAL", file_data.get("global_mode", False))
        ),
        root_markers=list(file_data.get("root_markers", DEFAULT_ROOT_MARKERS)),
        log_level=os.getenv("PROJECT_ON_SAVE_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
