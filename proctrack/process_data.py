"""Per-process records and their activity sessions."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ProcessInfo:
    """A snapshot of what the operating system reports about a process."""

    pid: int = 0
    started_threads: int = 0
    ppid: int = 0
    base_priority: int = 0
    exe_name: str = ""
    exe_path: str = ""
    priority_class: int = 0
    creation_time: int = 0
    exit_time: int = 0
    kernel_time: int = 0
    user_time: int = 0
    process_affinity: int = 0
    system_affinity: int = 0
    ram_usage: int = 0
    is_visible_app: bool = False


@dataclass
class Session:
    """A span of activity, as monotonic-clock nanoseconds."""

    start_time: int
    end_time: int


def _now() -> int:
    return time.monotonic_ns()


class ProcessData:
    """Tracks whether a process is active and records its sessions."""

    def __init__(self, info: ProcessInfo) -> None:
        self.info = info
        self.start = _now()
        self.sessions: list[Session] = []
        self.is_active = False
        self.is_tracked = False
        self.was_updated = False

    def __repr__(self) -> str:
        return (
            f"ProcessData(exe_path={self.info.exe_path!r}, is_active={self.is_active}, "
            f"is_tracked={self.is_tracked}, sessions={len(self.sessions)})"
        )

    def update_active(self) -> None:
        """Mark the process as seen running in this update."""
        if not self.is_active:
            self.is_active = True
            self.start = _now()
        self.was_updated = True

    def update_inactive(self) -> None:
        """Mark the process as not running; close a session if tracked."""
        if self.is_active:
            self.is_active = False
            if self.is_tracked:
                self.sessions.append(Session(self.start, _now()))
        self.was_updated = True

    def matches(self, info: ProcessInfo | ProcessData) -> bool:
        """True if both refer to the same executable started at the same time."""
        other = info.info if isinstance(info, ProcessData) else info
        return (
            self.info.exe_path == other.exe_path
            and self.info.creation_time == other.creation_time
        )

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary describing this process."""
        return {
            "start": self.start,
            "is_active": self.is_active,
            "is_tracked": self.is_tracked,
            "was_updated": self.was_updated,
            "sessions": [
                {"start_time": s.start_time, "end_time": s.end_time} for s in self.sessions
            ],
            "data": {
                "pid": self.info.pid,
                "started_threads": self.info.started_threads,
                "ppid": self.info.ppid,
                "base_priority": self.info.base_priority,
                "exe_name": self.info.exe_name,
                "exe_path": self.info.exe_path,
                "priority_class": self.info.priority_class,
            },
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ProcessData:
        """Build a ProcessData from ``to_json`` output; raise ValueError if malformed."""
        try:
            process = cls(ProcessInfo())
            process.start = _number(data["start"])
            process.is_active = _flag(data["is_active"])
            process.is_tracked = _flag(data["is_tracked"])
            process.was_updated = _flag(data["was_updated"])
            process.sessions = [
                Session(_number(s["start_time"]), _number(s["end_time"]))
                for s in _sequence(data["sessions"])
            ]
            info = data["data"]
            process.info = ProcessInfo(
                pid=_number(info["pid"]),
                started_threads=_number(info["started_threads"]),
                ppid=_number(info["ppid"]),
                base_priority=_number(info["base_priority"]),
                exe_name=_text(info["exe_name"]),
                exe_path=_text(info["exe_path"]),
                priority_class=_number(info["priority_class"]),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed process record: {exc}") from exc
        return process


def _number(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return int(value)


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {value!r}")
    return value


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {value!r}")
    return value


def _sequence(value: Any) -> list[Any]:
    if not isinstance(value, list):
        raise TypeError(f"expected a list, got {value!r}")
    return value