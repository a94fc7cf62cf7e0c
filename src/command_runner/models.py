"""Domain models for prepared commands and execution outcomes."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class CommandType(str, Enum):
    """Declared type tag of a command value."""

    SHELL = "shell"
    COMMAND = "command"


class StatusType(str, Enum):
    """Classified outcome of one executed command."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class CommandValue:
    """What to run: a shell command line or a host command descriptor."""

    type: CommandType | None
    value: str | tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.value, str):
            return
        parts = tuple(self.value)
        if not parts:
            raise ValueError("Command value sequence must contain at least a command name.")
        if not all(isinstance(part, str) for part in parts):
            raise TypeError(f"Command value parts must be strings: {parts!r}")
        object.__setattr__(self, "value", parts)


@dataclass(frozen=True, slots=True)
class ExecOptions:
    """Process options passed through to the shell spawner."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    shell_executable: str | None = None
    encoding: str = "utf-8"


@dataclass(frozen=True, slots=True)
class PreparedCommand:
    """Fully resolved unit of work ready for execution."""

    cmd: CommandValue
    exec_options: ExecOptions | None = None
    is_async: bool = False
    name: str | None = None

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        value = self.cmd.value
        return value if isinstance(value, str) else " ".join(value)


ProcessHandleFn = Callable[[PreparedCommand], None]


@dataclass(frozen=True, slots=True)
class ProcessHandlers:
    """Lifecycle hooks invoked around each command execution."""

    on_started: ProcessHandleFn
    on_finish: ProcessHandleFn


def host_command_signature(value: str | Sequence[str]) -> tuple[str, tuple[str, ...]]:
    """Split a host command value into its primary name and positional args."""

    parts = (value,) if isinstance(value, str) else tuple(value)
    if not parts:
        raise ValueError("Host command value must contain at least a command name.")
    primary, *rest = parts
    return primary, tuple(rest)
