from __future__ import annotations

from pathlib import Path

import allure
import pytest

from command_runner.config import Settings

pytestmark = [
    allure.epic("Configuration"),
    allure.feature("Environment Settings"),
]


def test_from_env_defaults(monkeypatch) -> None:
    for name in (
        "COMMAND_RUNNER_SHELL",
        "COMMAND_RUNNER_ENCODING",
        "COMMAND_RUNNER_LOG_LEVEL",
        "COMMAND_RUNNER_ECHO",
        "COMMAND_RUNNER_COMMANDS_FILE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings == Settings()


def test_from_env_reads_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COMMAND_RUNNER_SHELL", "/bin/bash")
    monkeypatch.setenv("COMMAND_RUNNER_ENCODING", "latin-1")
    monkeypatch.setenv("COMMAND_RUNNER_LOG_LEVEL", "debug")
    monkeypatch.setenv("COMMAND_RUNNER_ECHO", "off")
    monkeypatch.setenv("COMMAND_RUNNER_COMMANDS_FILE", str(tmp_path / "env.json"))

    settings = Settings.from_env()

    assert settings.shell_executable == "/bin/bash"
    assert settings.encoding == "latin-1"
    assert settings.log_level == "DEBUG"
    assert settings.echo is False
    assert settings.commands_file == tmp_path / "env.json"
    assert Settings.from_env(commands_file=Path("cli.json")).commands_file == Path("cli.json")


@pytest.mark.parametrize(
    ("name", "value", "match"),
    [
        ("COMMAND_RUNNER_LOG_LEVEL", "chatty", "COMMAND_RUNNER_LOG_LEVEL must be one of"),
        ("COMMAND_RUNNER_ENCODING", "utf-99", "Unknown COMMAND_RUNNER_ENCODING"),
        ("COMMAND_RUNNER_ECHO", "maybe", "Invalid boolean value for COMMAND_RUNNER_ECHO"),
    ],
)
def test_from_env_rejects_invalid_values(monkeypatch, name: str, value: str, match: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=match):
        Settings.from_env()
