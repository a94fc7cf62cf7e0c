"""Shell versus host-command classification of command values."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from command_runner.models import CommandType

ShellPredicate = Callable[[CommandType | None, str | Sequence[str]], bool]


def is_cmd_shell(command_type: CommandType | None, value: str | Sequence[str]) -> bool:
    """Return True when the command should be spawned as a shell process.

    An explicit type tag always wins. Untagged values are shell command lines
    when they are plain strings and host commands otherwise.
    """

    if command_type == CommandType.SHELL:
        return True
    if command_type == CommandType.COMMAND:
        return False
    return isinstance(value, str)
