"""Tests for the command-line entry point."""

import asyncio
from pathlib import Path

from project_on_save.__main__ import _save_once, command_line
from project_on_save.config import OnSaveConfig


class TestCommandLine:
    def test_single_argument_is_kept_verbatim(self):
        assert command_line(["ruff format . && echo 'all good'"]) == "ruff format . && echo 'all good'"

    def test_words_keep_their_quoting(self):
        assert command_line(["sh", "-c", "echo a b"]) == "sh -c 'echo a b'"

    def test_quoted_words_survive_the_shell(self, tmp_path: Path, capsys):
        (tmp_path / ".git").mkdir()
        target = tmp_path / "a.txt"
        config = OnSaveConfig(run_synchronously=True, show_output=True)

        code = asyncio.run(_save_once(config, str(target), command_line(["sh", "-c", "echo a  b"])))

        assert code == 0
        assert capsys.readouterr().out.endswith("a  b\n")

    def test_async_exit_code(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        config = OnSaveConfig(show_output=False)

        code = asyncio.run(_save_once(config, str(tmp_path / "a.txt"), "exit 7"))

        assert code == 7
