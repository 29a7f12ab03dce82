"""Tests for configuration loading."""

import pytest
from pathlib import Path

from project_on_save.config import DEFAULT_ROOT_MARKERS, load_config

ENV_KEYS = [
    "PROJECT_ON_SAVE_TIMEOUT",
    "PROJECT_ON_SAVE_SHOW_OUTPUT",
    "PROJECT_ON_SAVE_RUN_SYNCHRONOUSLY",
    "PROJECT_ON_SAVE_GLOBAL",
    "PROJECT_ON_SAVE_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestConfig:
    def test_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "missing.toml")
        assert config.timeout == 30
        assert config.show_output is True
        assert config.run_synchronously is False
        assert config.global_mode is False
        assert config.root_markers == DEFAULT_ROOT_MARKERS
        assert config.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PROJECT_ON_SAVE_RUN_SYNCHRONOUSLY", "yes")
        monkeypatch.setenv("PROJECT_ON_SAVE_SHOW_OUTPUT", "0")
        monkeypatch.setenv("PROJECT_ON_SAVE_TIMEOUT", "5")

        config = load_config()
        assert config.run_synchronously is True
        assert config.show_output is False
        assert config.timeout == 5

    def test_toml_file(self, tmp_path: Path):
        toml_path = tmp_path / "custom.toml"
        toml_path.write_text("""
global_mode = true
root_markers = [".git", "build.gradle"]

[command]
run_synchronously = true
show_output = false
timeout = 120
""")
        config = load_config(toml_path)
        assert config.global_mode is True
        assert config.root_markers == [".git", "build.gradle"]
        assert config.run_synchronously is True
        assert config.show_output is False
        assert config.timeout == 120

    def test_toml_in_cwd_is_found(self, tmp_path: Path):
        (tmp_path / "project-on-save.toml").write_text("log_level = \"DEBUG\"\n")
        config = load_config()
        assert config.log_level == "DEBUG"

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PROJECT_ON_SAVE_RUN_SYNCHRONOUSLY", "false")

        toml_path = tmp_path / "project-on-save.toml"
        toml_path.write_text("""
[command]
run_synchronously = true
""")
        config = load_config(toml_path)
        assert config.run_synchronously is False  # env wins

    def test_bad_boolean(self, monkeypatch):
        monkeypatch.setenv("PROJECT_ON_SAVE_GLOBAL", "maybe")
        with pytest.raises(ValueError, match="Not a boolean"):
            load_config()
