"""Command orchestrator for shell processes and host command invocations."""

from command_runner.models import (
    CommandType,
    CommandValue,
    ExecOptions,
    PreparedCommand,
    ProcessHandlers,
    StatusType,
)
from command_runner.runner import CommandRunner

__version__ = "0.1.0"

__all__ = [
    "CommandRunner",
    "CommandType",
    "CommandValue",
    "ExecOptions",
    "PreparedCommand",
    "ProcessHandlers",
    "StatusType",
    "__version__",
]
