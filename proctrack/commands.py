"""Commands sent by a client over the control connection."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class CommandType(IntEnum):
    """Kinds of commands a client may send, keyed by their wire id."""

    REPORT = 0
    QUIT = 1
    SHUTDOWN = 2
    TRACK = 3
    UNTRACK = 4


class InvalidCommandError(ValueError):
    """Raised when a message does not describe a valid command."""


@dataclass(frozen=True)
class Command:
    """A parsed command. ``path`` is set for track and untrack commands."""

    type: CommandType = CommandType.REPORT
    path: str | None = None


_NEEDS_PATH = frozenset({CommandType.TRACK, CommandType.UNTRACK})


def command_type_from_int(value: int) -> CommandType:
    """Return the command type for a wire id, or raise InvalidCommandError."""
    try:
        return CommandType(value)
    except ValueError:
        raise InvalidCommandError(f"unknown command id: {value!r}") from None


def _extract_path(message: dict[str, Any]) -> str:
    extra = message.get("extra")
    if not isinstance(extra, dict):
        raise InvalidCommandError("command requires an 'extra' object")
    path = extra.get("path")
    if not isinstance(path, str):
        raise InvalidCommandError("command requires a string 'extra.path'")
    return path


def command_from_json(text: str | bytes) -> Command:
    """Parse a JSON message into a Command.

    The message must be an object with a numeric ``command_id``; track and
    untrack commands also need ``extra.path`` as a string.
    """
    try:
        message = json.loads(text)
    except ValueError as exc:
        raise InvalidCommandError("message is not valid JSON") from exc

    if not isinstance(message, dict):
        raise InvalidCommandError("message must be a JSON object")

    raw_id = message.get("command_id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (int, float)):
        raise InvalidCommandError("message requires a numeric 'command_id'")
    if isinstance(raw_id, float) and not math.isfinite(raw_id):
        raise InvalidCommandError("message requires a finite 'command_id'")

    command_type = command_type_from_int(int(raw_id))
    if command_type in _NEEDS_PATH:
        return Command(command_type, _extract_path(message))
    return Command(command_type)