"""Entry point: python -m project_on_save [repl|run]

- No args / "repl": Interactive REPL
- "run PATH CMD":   Register CMD for PATH, save it once, print the output
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import sys

from project_on_save.config import OnSaveConfig, load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _run_repl() -> None:
    """Interactive REPL mode."""
    config = load_config()
    _setup_logging(config.log_level)

    from project_on_save.core import ProjectOnSave
    from project_on_save.repl import Repl

    app = ProjectOnSave(config, echo=print)
    repl = Repl(app)

    try:
        asyncio.run(repl.start())
    except KeyboardInterrupt:
        pass


async def _save_once(config: OnSaveConfig, path: str, command: str) -> int:
    from project_on_save.core import ProjectOnSave
    from project_on_save.dispatcher import AsyncRun
    from project_on_save.output import buffer_name_for

    app = ProjectOnSave(config, echo=lambda text: print(text, file=sys.stderr))
    document = app.open(path)
    app.register(document, command)
    app.enable(document)
    await app.save(document)

    run = app.mode.last_run
    if run is None:
        print(f"No project root found for {document.path}", file=sys.stderr)
        await app.stop()
        return 1

    if isinstance(run, AsyncRun):
        returncode = await run.wait()
        output = run.output
    else:
        returncode = run.returncode
        output = app.buffers.get(buffer_name_for(run.cwd))

    if output is not None:
        print(output.text, end="")
    await app.stop()
    return returncode


def command_line(args: list[str]) -> str:
    """Join argv words back into one shell command, keeping their quoting.

    A single argument is taken as an already-written shell command.
    """
    if len(args) == 1:
        return args[0]
    return shlex.join(args)


def _run_once(args: list[str]) -> None:
    """One-shot mode: save a file once with a command."""
    if len(args) < 2:
        print("Usage: python -m project_on_save run PATH COMMAND...")
        sys.exit(2)

    config = load_config()
    _setup_logging(config.log_level)
    sys.exit(asyncio.run(_save_once(config, args[0], command_line(args[1:]))))


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "repl"

    if cmd == "repl":
        _run_repl()
    elif cmd == "run":
        _run_once(sys.argv[2:])
    else:
        print("Usage: python -m project_on_save [repl|run]")
        print("  repl                 Interactive REPL (default)")
        print("  run PATH COMMAND...  Register COMMAND for PATH, save once, print output")
        sys.exit(1)


if __name__ == "__main__":
    main()
