"""Command orchestration: dispatch, outcome reporting, and sequence scheduling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from command_runner.classification import ShellPredicate, is_cmd_shell
from command_runner.host import HostCommandRegistry
from command_runner.models import (
    CommandValue,
    ExecOptions,
    PreparedCommand,
    ProcessHandlers,
    StatusType,
    host_command_signature,
)
from command_runner.process_slot import ProcessSlot
from command_runner.reporting import ResultReporter, get_clickable_links_in_msg

logger = logging.getLogger(__name__)

CommandResult = StatusType | asyncio.Task[StatusType]


class CommandRunner:
    """Runs prepared commands one after another through a single shell process slot.

    ``is_running`` is a plain flag: overlapping async commands each set it on
    start and clear it on finish, so its value reflects whichever command
    changed it last. ``in_flight`` counts commands between their started and
    finished hooks.
    """

    def __init__(
        self,
        *,
        reporter: ResultReporter,
        registry: HostCommandRegistry,
        is_shell: ShellPredicate = is_cmd_shell,
        annotate: Callable[[str], str] = get_clickable_links_in_msg,
        slot: ProcessSlot | None = None,
    ) -> None:
        self.reporter = reporter
        self.registry = registry
        self.is_shell = is_shell
        self.annotate = annotate
        self.slot = slot or ProcessSlot()
        self.is_running = False
        self.in_flight = 0
        self._pending: list[asyncio.Task[StatusType]] = []

    @property
    def pending_tasks(self) -> list[asyncio.Task[StatusType]]:
        """Detached async commands that have not completed yet."""

        return [task for task in self._pending if not task.done()]

    def resolve_process_success(self, message: str) -> StatusType:
        self.reporter.show_message(self.annotate(message))
        return StatusType.SUCCESS

    def resolve_process_error(self, message: str) -> StatusType:
        self.reporter.show_error(self.annotate(message))
        return StatusType.ERROR

    def resolve(self, status: StatusType, message: str) -> StatusType:
        if status is StatusType.ERROR:
            return self.resolve_process_error(message)
        return self.resolve_process_success(message)

    async def run_shell_process(
        self,
        command_text: str,
        exec_options: ExecOptions | None,
    ) -> StatusType:
        result = await self.slot.run_shell(command_text, exec_options)
        return self.resolve(result.status, result.message)

    async def run_host_command(self, value: str | Sequence[str]) -> StatusType:
        try:
            primary, args = host_command_signature(value)
            fulfilled = await self.registry.execute_command(primary, *args)
        except Exception as error:  # noqa: BLE001
            logger.debug("Host command %r rejected: %s", value, error)
            return self.resolve_process_error(str(error))
        return self.resolve_process_success("" if fulfilled is None else str(fulfilled))

    async def run_process(
        self,
        command: CommandValue,
        exec_options: ExecOptions | None,
    ) -> StatusType:
        """Execute one command value on the shell or host path."""

        if self.is_shell(command.type, command.value):
            if not isinstance(command.value, str):
                return self.resolve_process_error(
                    f"Shell command must be a single command line, got {command.value!r}",
                )
            return await self.run_shell_process(command.value, exec_options)
        return await self.run_host_command(command.value)

    def run_command(
        self,
        command: PreparedCommand,
        handlers: ProcessHandlers,
    ) -> asyncio.Task[StatusType]:
        """Start one command and return its pending result."""

        self.is_running = True
        self.in_flight += 1
        try:
            handlers.on_started(command)
        except Exception:
            self.is_running = False
            self.in_flight -= 1
            raise
        logger.info("Started command %s (async=%s)", command.label, command.is_async)
        return asyncio.create_task(self._execute(command, handlers), name=command.label)

    async def run_commands(
        self,
        commands: Sequence[PreparedCommand],
        handlers: ProcessHandlers,
    ) -> list[CommandResult]:
        """Run ``commands`` in order; async ones are started and left pending."""

        results: list[CommandResult] = []
        for command in commands:
            task = self.run_command(command, handlers)
            if command.is_async:
                self._pending.append(task)
                results.append(task)
            else:
                results.append(await task)
        return results

    async def wait_pending(self) -> list[StatusType]:
        """Wait for every detached async command, in start order."""

        pending, self._pending = self._pending, []
        return list(await asyncio.gather(*pending))

    async def _execute(self, command: PreparedCommand, handlers: ProcessHandlers) -> StatusType:
        try:
            return await self.run_process(command.cmd, command.exec_options)
        finally:
            self.is_running = False
            self.in_flight -= 1
            logger.info("Finished command %s", command.label)
            handlers.on_finish(command)
