"""Snapshots of the processes running on this machine."""

from __future__ import annotations

import os
from typing import Any

import psutil

from proctrack.process_data import ProcessInfo

# Times are reported in 100-nanosecond ticks, counted from the Unix epoch for
# creation times and from process start for CPU times.
_TICKS_PER_SECOND = 10_000_000


class ProcessQueryError(RuntimeError):
    """Raised when information about processes cannot be obtained."""


def _ticks(seconds: float) -> int:
    return int(round(seconds * _TICKS_PER_SECOND))


def _mask(cpus: list[int]) -> int:
    return sum(1 << cpu for cpu in set(cpus))


def _system_affinity() -> int:
    return _mask(list(range(os.cpu_count() or 1)))


def _process_affinity(process: Any, system_affinity: int) -> int:
    cpu_affinity = getattr(process, "cpu_affinity", None)
    if cpu_affinity is None:
        # The platform cannot restrict processes to CPUs: all are allowed.
        return system_affinity
    return _mask(cpu_affinity())


def process_info_from(process: Any) -> ProcessInfo:
    """Collect a ProcessInfo for one psutil process.

    Raises ProcessQueryError if the process has gone away, cannot be
    inspected, or reports no executable path.
    """
    try:
        exe_path = process.exe()
        if not exe_path:
            raise ProcessQueryError(f"process {process.pid} has no executable path")
        priority = process.nice()
        cpu_times = process.cpu_times()
        system_affinity = _system_affinity()
        return ProcessInfo(
            pid=process.pid,
            started_threads=process.num_threads(),
            ppid=process.ppid(),
            base_priority=int(priority),
            exe_name=process.name(),
            exe_path=exe_path,
            priority_class=int(priority),
            creation_time=_ticks(process.create_time()),
            exit_time=0,
            kernel_time=_ticks(cpu_times.system),
            user_time=_ticks(cpu_times.user),
            process_affinity=_process_affinity(process, system_affinity),
            system_affinity=system_affinity,
            ram_usage=process.memory_info().rss,
        )
    except (psutil.Error, OSError) as exc:
        raise ProcessQueryError(f"cannot query process {process.pid}: {exc}") from exc


def get_process_data() -> list[ProcessInfo]:
    """Return information for every process that can be inspected.

    Processes that cannot be queried are skipped. Raises ProcessQueryError
    if the process list itself cannot be read.
    """
    try:
        processes = list(psutil.process_iter())
    except (psutil.Error, OSError) as exc:
        raise ProcessQueryError(f"cannot list processes: {exc}") from exc

    result = []
    for process in processes:
        try:
            result.append(process_info_from(process))
        except ProcessQueryError:
            continue
    return result