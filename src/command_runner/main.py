"""CLI entrypoint for command-runner."""

from pathlib import Path

import rich_click as click

from command_runner import __version__
from command_runner.controllers import (
    ListCommandsCommand,
    RunCommandsCommand,
    RunnerCliController,
)

click.rich_click.USE_MARKDOWN = True
RUNNER_CONTROLLER = RunnerCliController()


@click.group()
@click.version_option(version=__version__, prog_name="command-runner")
def command_runner() -> None:
    """Run shell and host commands from a commands file."""


@command_runner.command("run")
@click.option(
    "--file",
    "commands_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Commands JSON file. Defaults to COMMAND_RUNNER_COMMANDS_FILE or commands.json.",
)
def run(commands_file: Path | None) -> None:
    """Run every command in order, waiting for async ones before exiting."""

    result = RUNNER_CONTROLLER.run(RunCommandsCommand(commands_file=commands_file))
    _emit_lines(result.lines)
    if not result.success:
        raise click.ClickException("One or more commands failed.")


@command_runner.command("list")
@click.option(
    "--file",
    "commands_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Commands JSON file. Defaults to COMMAND_RUNNER_COMMANDS_FILE or commands.json.",
)
def list_commands(commands_file: Path | None) -> None:
    """Show the prepared commands without running them."""

    _emit_lines(RUNNER_CONTROLLER.list_commands(ListCommandsCommand(commands_file=commands_file)))


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    command_runner()
