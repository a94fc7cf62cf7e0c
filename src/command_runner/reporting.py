"""Result reporting sink and clickable-link annotation for outcome messages."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import click

from command_runner.models import StatusType

logger = logging.getLogger(__name__)

# Relative (./, ../) or absolute file references with an optional :line[:col] suffix.
# Paths glued to a word character or slash are skipped, which leaves "scheme://" text alone.
_FILE_REFERENCE_RE = re.compile(
    r"(?<![\w/.~-])(?P<path>\.{1,2}/[\w.~/-]+|/[\w.~-]+(?:/[\w.~-]+)+)"
    r"(?P<position>:\d+(?::\d+)?)?",
)


class ResultReporter(Protocol):
    """Sink receiving classified, link-annotated outcome messages."""

    def show_message(self, message: str) -> None:
        """Record an informational/success outcome."""

    def show_error(self, message: str) -> None:
        """Record an error outcome."""


@dataclass(slots=True)
class ReportedMessage:
    """One message delivered to the output channel."""

    status: StatusType
    message: str


@dataclass(slots=True)
class OutputChannel:
    """Default reporter: keeps message history, logs, and optionally echoes to the terminal."""

    echo: bool = False
    messages: list[ReportedMessage] = field(default_factory=list)

    def show_message(self, message: str) -> None:
        self.messages.append(ReportedMessage(status=StatusType.SUCCESS, message=message))
        logger.info("Command succeeded: %s", message)
        if self.echo:
            click.echo(message)

    def show_error(self, message: str) -> None:
        self.messages.append(ReportedMessage(status=StatusType.ERROR, message=message))
        logger.error("Command failed: %s", message)
        if self.echo:
            click.echo(message, err=True)

    def errors(self) -> list[str]:
        return [item.message for item in self.messages if item.status is StatusType.ERROR]


def get_clickable_links_in_msg(message: str, base_dir: Path | None = None) -> str:
    """Rewrite file references in ``message`` as ``file://`` URIs.

    Relative references resolve against ``base_dir`` (the current directory
    when omitted). A trailing ``:line`` or ``:line:col`` is preserved. Text that
    already carries a URI scheme is left alone, so the transform is idempotent.
    """

    root = base_dir if base_dir is not None else Path.cwd()

    def _replace(match: re.Match[str]) -> str:
        raw_path = match.group("path")
        path = Path(raw_path)
        if not path.is_absolute():
            path = root / path
        return f"{Path(_normalize(path)).as_uri()}{match.group('position') or ''}"

    return _FILE_REFERENCE_RE.sub(_replace, message)


def _normalize(path: Path) -> str:
    # Collapse "." and ".." lexically; the referenced file need not exist.
    parts: list[str] = []
    for part in path.parts[1:]:
        if part == ".":
            continue
        if part == "..":
            if parts:
                parts.pop()
            continue
        parts.append(part)
    return path.parts[0] + "/".join(parts)
