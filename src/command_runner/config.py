"""Runtime configuration for the command runner CLI."""

from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass
from pathlib import Path

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class Settings:
    """Settings shared by CLI commands."""

    commands_file: Path = Path("commands.json")
    shell_executable: str | None = None
    encoding: str = "utf-8"
    log_level: str = "WARNING"
    echo: bool = True

    @classmethod
    def from_env(cls, commands_file: Path | None = None) -> Settings:
        """Load settings from environment with defaults suitable for local use."""

        shell = os.getenv("COMMAND_RUNNER_SHELL", "").strip()
        settings = cls(
            commands_file=commands_file
            or Path(os.getenv("COMMAND_RUNNER_COMMANDS_FILE", "commands.json")),
            shell_executable=shell or None,
            encoding=os.getenv("COMMAND_RUNNER_ENCODING", "utf-8").strip(),
            log_level=os.getenv("COMMAND_RUNNER_LOG_LEVEL", "WARNING").strip().upper(),
            echo=_env_bool("COMMAND_RUNNER_ECHO", default=True),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise configuration error for unusable values."""

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"COMMAND_RUNNER_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}: "
                f"{self.log_level!r}",
            )
        try:
            codecs.lookup(self.encoding)
        except LookupError as error:
            raise ValueError(f"Unknown COMMAND_RUNNER_ENCODING: {self.encoding!r}") from error

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
