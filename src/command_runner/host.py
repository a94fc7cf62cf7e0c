"""Host command registry invoked by name with positional string arguments."""

from __future__ import annotations

import asyncio
import inspect
import logging
import os
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

HostCommandHandler = Callable[..., Any]


class HostCommandError(RuntimeError):
    """Host command rejected or could not be resolved."""


class HostCommandRegistry(Protocol):
    """Registry of named host capabilities."""

    async def execute_command(self, name: str, *args: str) -> object:
        """Run ``name`` with ``args``; raise to reject."""


class CommandRegistry:
    """In-process registry of sync or async command handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, HostCommandHandler] = {}

    def register(self, name: str, handler: HostCommandHandler) -> None:
        normalized = name.strip()
        if not normalized:
            raise ValueError("Host command name must be a non-empty string.")
        if normalized in self._handlers:
            raise ValueError(f"Host command already registered: {normalized!r}")
        self._handlers[normalized] = handler

    def unregister(self, name: str) -> None:
        self._handlers.pop(name, None)

    def names(self) -> list[str]:
        return sorted(self._handlers)

    async def execute_command(self, name: str, *args: str) -> object:
        handler = self._handlers.get(name)
        if handler is None:
            raise HostCommandError(f"command '{name}' not found")
        logger.debug("Executing host command %s with %d argument(s)", name, len(args))
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result


def builtin_registry() -> CommandRegistry:
    """Registry with the small set of commands available from the CLI."""

    registry = CommandRegistry()
    registry.register("echo", _echo)
    registry.register("sleep", _sleep)
    registry.register("getenv", _getenv)
    registry.register("fail", _fail)
    return registry


def _echo(*args: str) -> str:
    return " ".join(args)


async def _sleep(seconds: str = "0") -> None:
    try:
        delay = float(seconds)
    except ValueError as error:
        raise HostCommandError(f"sleep expects a number of seconds, got {seconds!r}") from error
    await asyncio.sleep(max(0.0, delay))


def _getenv(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _fail(*args: str) -> None:
    raise HostCommandError(" ".join(args) or "failed")
