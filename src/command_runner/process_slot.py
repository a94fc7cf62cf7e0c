"""Single-occupancy slot for the externally spawned shell process."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from command_runner.models import ExecOptions, StatusType

logger = logging.getLogger(__name__)

PREVIOUS_NOT_KILLED_MESSAGE = "previous is not killed"

ProcessFactory = Callable[[], Awaitable[asyncio.subprocess.Process]]


class PreemptionError(RuntimeError):
    """Previous slot occupant could not be terminated."""


@dataclass(slots=True)
class ShellRunResult:
    """Raw classified outcome of one shell run, before reporting."""

    status: StatusType
    message: str


class ProcessSlot:
    """Holds at most one live shell process and owns the pre-emption rule.

    A new shell run first terminates whatever process still occupies the slot.
    When that termination fails the run is refused and the stale handle stays
    installed, so every later shell run is refused as well until the handle is
    released by other means.
    """

    def __init__(self) -> None:
        self._handle: asyncio.subprocess.Process | None = None
        self._lock = asyncio.Lock()

    @property
    def handle(self) -> asyncio.subprocess.Process | None:
        return self._handle

    @property
    def occupied(self) -> bool:
        return self._handle is not None

    async def try_replace(self, spawn: ProcessFactory) -> asyncio.subprocess.Process:
        """Terminate the current occupant, then install the process produced by ``spawn``.

        Raises ``PreemptionError`` without calling ``spawn`` when the occupant
        survives. Errors raised by ``spawn`` propagate with the slot left empty.
        """

        async with self._lock:
            if self._handle is not None:
                if not _terminate(self._handle):
                    raise PreemptionError(PREVIOUS_NOT_KILLED_MESSAGE)
                self._handle = None
            process = await spawn()
            self._handle = process
            return process

    async def run_shell(self, command_text: str, options: ExecOptions | None) -> ShellRunResult:
        """Run ``command_text`` in the slot; failures resolve to ``ERROR`` instead of raising."""

        effective = options or ExecOptions()
        try:
            process = await self.try_replace(lambda: _spawn(command_text, effective))
        except PreemptionError as error:
            logger.warning("Refusing to start %r: %s", command_text, error)
            return ShellRunResult(status=StatusType.ERROR, message=str(error))
        except (OSError, ValueError) as error:
            logger.warning("Failed to start %r: %s", command_text, error)
            return ShellRunResult(status=StatusType.ERROR, message=str(error))

        logger.debug("Started shell process pid=%s: %s", process.pid, command_text)
        stdout_raw, stderr_raw = await process.communicate()
        stdout = stdout_raw.decode(effective.encoding, errors="replace")
        stderr = stderr_raw.decode(effective.encoding, errors="replace")
        logger.debug("Shell process pid=%s exited with code %s", process.pid, process.returncode)

        # Any stderr output is an error signal; the exit code is not consulted.
        status = StatusType.ERROR if stderr != "" else StatusType.SUCCESS
        return ShellRunResult(status=status, message=f"stdout:{stdout}\nstderr:{stderr}")


async def _spawn(command_text: str, options: ExecOptions) -> asyncio.subprocess.Process:
    return await asyncio.create_subprocess_shell(
        command_text,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=options.cwd,
        env=dict(options.env) if options.env is not None else None,
        executable=options.shell_executable,
    )


def _terminate(process: asyncio.subprocess.Process) -> bool:
    if process.returncode is not None:
        return True
    try:
        process.kill()
    except ProcessLookupError:
        return True
    except OSError as error:
        logger.warning("Failed to kill previous shell process pid=%s: %s", process.pid, error)
        return False
    logger.info("Killed previous shell process pid=%s", process.pid)
    return True
