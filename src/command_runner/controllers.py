"""Controllers for command runner CLI commands."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

import click

from command_runner.classification import is_cmd_shell
from command_runner.config import Settings
from command_runner.contracts import read_commands_file
from command_runner.host import builtin_registry
from command_runner.models import PreparedCommand, ProcessHandlers, StatusType
from command_runner.reporting import OutputChannel
from command_runner.runner import CommandRunner


@dataclass(slots=True)
class RunCommandsCommand:
    """CLI input for running a commands file."""

    commands_file: Path | None


@dataclass(slots=True)
class ListCommandsCommand:
    """CLI input for listing a commands file."""

    commands_file: Path | None


@dataclass(slots=True)
class RunCommandsResult:
    """Run summary to render in CLI."""

    lines: list[str]
    success: bool


class RunnerCliController:
    """Loads prepared commands and drives the runner for CLI operations."""

    def run(self, command: RunCommandsCommand) -> RunCommandsResult:
        settings = _settings(command.commands_file)
        settings.configure_logging()
        commands = _load_commands(settings)
        if not commands:
            return RunCommandsResult(lines=["No commands to run."], success=True)

        channel = OutputChannel(echo=settings.echo)
        statuses = asyncio.run(_run_all(commands, channel=channel, echo=settings.echo))

        succeeded = sum(1 for status in statuses if status is StatusType.SUCCESS)
        failed = len(statuses) - succeeded
        lines = [f"Commands: total={len(statuses)} succeeded={succeeded} failed={failed}"]
        lines.extend(
            f"  {index + 1}. {item.label}: {status.value}"
            for index, (item, status) in enumerate(zip(commands, statuses, strict=True))
        )
        return RunCommandsResult(lines=lines, success=failed == 0)

    def list_commands(self, command: ListCommandsCommand) -> list[str]:
        settings = _settings(command.commands_file)
        commands = _load_commands(settings)
        if not commands:
            return ["No commands configured."]

        lines: list[str] = []
        for index, item in enumerate(commands, start=1):
            kind = "shell" if is_cmd_shell(item.cmd.type, item.cmd.value) else "command"
            mode = "async" if item.is_async else "sync"
            lines.append(f"{index}. [{kind}] [{mode}] {item.label}")
        return lines


async def _run_all(
    commands: list[PreparedCommand],
    *,
    channel: OutputChannel,
    echo: bool,
) -> list[StatusType]:
    def _on_started(item: PreparedCommand) -> None:
        if echo:
            click.echo(f"> {item.label}")

    def _on_finish(item: PreparedCommand) -> None:
        if echo:
            click.echo(f"< {item.label}")

    runner = CommandRunner(reporter=channel, registry=builtin_registry())
    results = await runner.run_commands(
        commands,
        ProcessHandlers(on_started=_on_started, on_finish=_on_finish),
    )
    await runner.wait_pending()
    return [result if isinstance(result, StatusType) else result.result() for result in results]


def _load_commands(settings: Settings) -> list[PreparedCommand]:
    path = settings.commands_file
    if not path.exists():
        raise click.ClickException(f"Commands file not found: {path}")
    try:
        return read_commands_file(
            path,
            shell_executable=settings.shell_executable,
            encoding=settings.encoding,
        )
    except (TypeError, ValueError) as error:
        raise click.ClickException(f"Invalid commands file {path}: {error}") from error


def _settings(commands_file: Path | None) -> Settings:
    try:
        return Settings.from_env(commands_file=commands_file)
    except ValueError as error:
        raise click.ClickException(str(error)) from error
