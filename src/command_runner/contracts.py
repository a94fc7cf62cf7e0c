"""JSON command file that produces the list of prepared commands."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from command_runner.models import CommandType, CommandValue, ExecOptions, PreparedCommand


def load_json(path: Path) -> dict[str, Any]:
    """Load JSON document and validate top-level object type."""

    payload = json.loads(path.read_text("utf-8"))
    if not isinstance(payload, dict):
        raise TypeError(f"Expected JSON object in {path}")
    return payload


def read_commands_file(
    path: Path,
    *,
    shell_executable: str | None = None,
    encoding: str = "utf-8",
) -> list[PreparedCommand]:
    """Deserialize and validate a commands file.

    Relative ``cwd`` entries resolve against the directory holding the file and
    ``env`` entries are layered over the current process environment.
    """

    raw = load_json(path)
    raw_commands = raw.get("commands")
    if not isinstance(raw_commands, list):
        raise TypeError("commands must be an array")

    base_dir = path.resolve().parent
    return [
        parse_command(
            item,
            index=index,
            base_dir=base_dir,
            shell_executable=shell_executable,
            encoding=encoding,
        )
        for index, item in enumerate(raw_commands)
    ]


def parse_command(
    raw: object,
    *,
    index: int,
    base_dir: Path,
    shell_executable: str | None = None,
    encoding: str = "utf-8",
) -> PreparedCommand:
    """Validate one command entry."""

    where = f"commands[{index}]"
    if not isinstance(raw, dict):
        raise TypeError(f"{where} must be an object")

    command_type = _parse_type(raw.get("type"), where=where)
    value = _parse_value(raw.get("value"), where=where)

    is_async = raw.get("async", False)
    if not isinstance(is_async, bool):
        raise TypeError(f"{where}.async must be a boolean")
    name = raw.get("name")
    if name is not None and not isinstance(name, str):
        raise TypeError(f"{where}.name must be a string")

    cwd_raw = raw.get("cwd")
    if cwd_raw is not None and not isinstance(cwd_raw, str):
        raise TypeError(f"{where}.cwd must be a string")
    env_raw = raw.get("env")
    if env_raw is not None and (
        not isinstance(env_raw, dict)
        or not all(isinstance(k, str) and isinstance(v, str) for k, v in env_raw.items())
    ):
        raise TypeError(f"{where}.env must be an object of string values")

    exec_options = ExecOptions(
        cwd=base_dir / cwd_raw if cwd_raw is not None else None,
        env={**os.environ, **env_raw} if env_raw is not None else None,
        shell_executable=shell_executable,
        encoding=encoding,
    )
    return PreparedCommand(
        cmd=CommandValue(type=command_type, value=value),
        exec_options=exec_options,
        is_async=is_async,
        name=name,
    )


def _parse_type(raw: object, *, where: str) -> CommandType | None:
    if raw is None:
        return None
    try:
        return CommandType(raw)
    except ValueError as error:
        allowed = ", ".join(item.value for item in CommandType)
        raise ValueError(f"{where}.type must be one of {allowed}: {raw!r}") from error


def _parse_value(raw: object, *, where: str) -> str | tuple[str, ...]:
    if isinstance(raw, str):
        if not raw.strip():
            raise ValueError(f"{where}.value must be a non-empty string")
        return raw
    if isinstance(raw, list):
        if not raw or not all(isinstance(part, str) for part in raw):
            raise TypeError(f"{where}.value must be a non-empty array of strings")
        return tuple(raw)
    raise TypeError(f"{where}.value must be a string or an array of strings")
