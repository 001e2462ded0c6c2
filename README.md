# proctrack

proctrack watches the processes running on your machine and records how long
the programs you track were running. Each stretch of time a tracked process is
seen running, then seen gone, becomes a *session*. Tracked processes and their
sessions are kept in a JSON data file (`data.json` in the working directory by
default). If the file does not exist at start-up, it is created holding an
empty list.

A client controls the tracker over a TCP connection by sending small JSON
commands. One client is served at a time.

## Installation

```
pip install .
```

## Running the tracker

```
proctrack
```

Options:

| option        | default     | meaning                                  |
|---------------|-------------|------------------------------------------|
| `--host`      | all addresses | address to listen on                   |
| `--port`      | `12345`     | port to listen on                        |
| `--data-file` | `data.json` | where tracked processes are kept         |
| `--interval`  | `3.0`       | seconds between process snapshots        |

The tracker takes a snapshot of the running processes (via `psutil`) every
interval. Processes it cannot inspect are skipped. It exits with status 1 if
it cannot listen for clients.

## Commands

Every command is a JSON object with a numeric `command_id`:

| id | command  | extra                           | reply                                                                    |
|----|----------|---------------------------------|--------------------------------------------------------------------------|
| 0  | report   | –                               | JSON with `tracked` and `currently_active` processes                     |
| 1  | quit     | –                               | `Client disconnected.`, then the connection is closed                    |
| 2  | shutdown | –                               | `Stopped tracking.`, then the tracker stops                              |
| 3  | track    | `{"path": "<executable path>"}` | `The provided process will be added to the list of tracked processes.`   |
| 4  | untrack  | `{"path": "<executable path>"}` | `The provided process will be removed from the list of tracked processes.` |

Example:

```json
{"command_id": 3, "extra": {"path": "/usr/bin/editor"}}
```

Anything that is not a valid command is answered with `Invalid command`.
Track and untrack commands are queued and applied one per update interval.
After each message the tracked processes are saved to the data file.

A tracked process is matched against running processes by both its executable
path and its creation time.

## Using it as a library

```python
from proctrack.commands import command_from_json
from proctrack.state import TrackerState

state = TrackerState("data.json")
state.set_up_on_startup()
state.update_state()                 # snapshot of running processes
state.add_process_to_track("/usr/bin/editor")
print(state.report())
state.save()

command = command_from_json('{"command_id": 0}')
```

Modules:

- `proctrack.commands` – `CommandType`, `Command`, `command_from_json`,
  `command_type_from_int`; invalid messages raise `InvalidCommandError`.
- `proctrack.process_data` – `ProcessInfo`, `Session` and `ProcessData`
  (activity tracking, `to_json` / `from_json`).
- `proctrack.processes` – `get_process_data()` and `process_info_from()`;
  failures raise `ProcessQueryError`.
- `proctrack.state` – `TrackerState`; failures raise `StateError`.
- `proctrack.networking` – `accept_client()`; failures raise `NetworkError`.
- `proctrack.server` – `Server` and the `main` entry point.
- `proctrack.filesystem` – `get_all_files_for_path()` and `read_file()`.

## Limitations

- Session times are monotonic-clock nanoseconds; they are not wall-clock times
  and are not comparable across reboots.
- There is no client program; any TCP client that sends the JSON commands
  above will do.

## Tests

```
pip install .[test]
pytest
```