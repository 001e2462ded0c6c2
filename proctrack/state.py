"""The tracker's view of running and tracked processes."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from proctrack.filesystem import read_file
from proctrack.process_data import ProcessData, ProcessInfo
from proctrack.processes import get_process_data

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "data.json"
_EMPTY_DATA = '{ "processes_to_track": [] }\n'


class StateError(RuntimeError):
    """Raised when the tracker state cannot be loaded or changed as asked."""


class TrackerState:
    """Currently running processes plus the processes the user tracks."""

    def __init__(self, data_file: str | os.PathLike[str] = DEFAULT_DATA_FILE) -> None:
        self.data_file = Path(data_file)
        self.currently_active: list[ProcessData] = []
        self.tracked: list[ProcessData] = []

    def set_up_on_startup(self) -> None:
        """Load tracked processes from the data file, creating it if missing."""
        if not self.data_file.exists():
            self.data_file.write_text(_EMPTY_DATA, encoding="utf-8")
            return

        try:
            text = read_file(self.data_file)
        except OSError as exc:
            raise StateError(f"cannot read {self.data_file}: {exc}") from exc

        try:
            data = json.loads(text)
        except ValueError as exc:
            raise StateError(f"{self.data_file} is not valid JSON") from exc

        if not isinstance(data, dict) or "processes_to_track" not in data:
            raise StateError(f"{self.data_file} has no 'processes_to_track' entry")
        records = data["processes_to_track"]
        if not isinstance(records, list):
            raise StateError("'processes_to_track' must be a list")

        for record in records:
            try:
                process = ProcessData.from_json(record)
            except ValueError as exc:
                raise StateError(str(exc)) from exc
            process.is_tracked = True
            self.tracked.append(process)

    def update_state(self, snapshot: Iterable[ProcessInfo] | None = None) -> None:
        """Bring the state up to date with a snapshot of running processes.

        Without a snapshot the running processes are queried from the system.
        """
        if snapshot is None:
            snapshot = get_process_data()

        for info in snapshot:
            is_tracked = False
            for process in self.tracked:
                if process.matches(info):
                    process.update_active()
                    is_tracked = True

            was_active_before = False
            if not is_tracked:
                for process in self.currently_active:
                    if process.matches(info):
                        process.update_active()
                        was_active_before = True

            if not is_tracked and not was_active_before:
                new_process = ProcessData(info)
                new_process.update_active()
                self.currently_active.append(new_process)

        self.currently_active = [p for p in self.currently_active if p.was_updated]

        for process in self.tracked:
            if not process.was_updated:
                process.update_inactive()

        for process in (*self.currently_active, *self.tracked):
            process.was_updated = False

    def add_process_to_track(self, path: str) -> None:
        """Start tracking the executable at ``path``."""
        new_process = ProcessData(ProcessInfo(exe_path=path))

        if any(process.matches(new_process) for process in self.tracked):
            raise StateError(f"already tracking {path!r}")

        active = next((p for p in self.currently_active if p.matches(new_process)), None)
        if active is not None:
            self.currently_active.remove(active)
            active.is_tracked = True
            self.tracked.append(active)
        else:
            new_process.is_tracked = True
            self.tracked.append(new_process)

        for tracked in self.tracked:
            if any(tracked.matches(current) for current in self.currently_active):
                raise StateError("tracked and currently active processes overlap")

    def remove_process_from_track(self, path: str) -> None:
        """Stop tracking the first tracked process with executable ``path``."""
        for process in self.tracked:
            if process.info.exe_path == path:
                self.tracked.remove(process)
                return
        raise StateError(f"{path!r} is not tracked")

    def report(self) -> dict[str, Any]:
        """Return the tracked and currently active processes as JSON data."""
        return {
            "tracked": [process.to_json() for process in self.tracked],
            "currently_active": [process.to_json() for process in self.currently_active],
        }

    def save(self) -> None:
        """Write the tracked processes to the data file."""
        data = {"processes_to_track": [process.to_json() for process in self.tracked]}
        self.data_file.write_text(json.dumps(data, indent=4) + "\n", encoding="utf-8")