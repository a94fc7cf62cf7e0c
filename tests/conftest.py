"""Shared test fixtures."""

from __future__ import annotations

import shlex
import sys

import pytest

from command_runner.host import CommandRegistry
from command_runner.models import PreparedCommand, ProcessHandlers
from command_runner.reporting import OutputChannel


@pytest.fixture()
def python_cmd():
    """Build a shell command line that replaces the shell with a Python snippet."""

    def _build(code: str) -> str:
        return f"exec {shlex.quote(sys.executable)} -c {shlex.quote(code)}"

    return _build


@pytest.fixture()
def channel() -> OutputChannel:
    return OutputChannel()


@pytest.fixture()
def registry() -> CommandRegistry:
    return CommandRegistry()


@pytest.fixture()
def events() -> list[tuple[str, str]]:
    return []


@pytest.fixture()
def recording_handlers(events) -> ProcessHandlers:
    """Hooks that append ("started" | "finished", label) to ``events``."""

    def _on_started(command: PreparedCommand) -> None:
        events.append(("started", command.label))

    def _on_finish(command: PreparedCommand) -> None:
        events.append(("finished", command.label))

    return ProcessHandlers(on_started=_on_started, on_finish=_on_finish)
