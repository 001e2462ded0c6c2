import json

import pytest

from proctrack.commands import (
    Command,
    CommandType,
    InvalidCommandError,
    command_from_json,
    command_type_from_int,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, CommandType.REPORT),
        (1, CommandType.QUIT),
        (2, CommandType.SHUTDOWN),
        (3, CommandType.TRACK),
        (4, CommandType.UNTRACK),
    ],
)
def test_command_type_from_int(value, expected):
    assert command_type_from_int(value) is expected


@pytest.mark.parametrize("value", [-1, 5, 100])
def test_command_type_from_int_rejects_unknown(value):
    with pytest.raises(InvalidCommandError):
        command_type_from_int(value)


@pytest.mark.parametrize(
    "command_id, expected",
    [(0, CommandType.REPORT), (1, CommandType.QUIT), (2, CommandType.SHUTDOWN)],
)
def test_simple_commands(command_id, expected):
    command = command_from_json(json.dumps({"command_id": command_id}))
    assert command == Command(expected)
    assert command.path is None


@pytest.mark.parametrize("command_id, expected", [(3, CommandType.TRACK), (4, CommandType.UNTRACK)])
def test_path_commands(command_id, expected):
    path = "C:\\Programs\\app.exe"
    message = json.dumps({"command_id": command_id, "extra": {"path": path}})
    command = command_from_json(message)
    assert command.type is expected
    assert command.path == path


def test_bytes_message_is_accepted():
    message = json.dumps({"command_id": 3, "extra": {"path": "/bin/app"}}).encode()
    assert command_from_json(message) == Command(CommandType.TRACK, "/bin/app")


def test_float_command_id_is_truncated():
    assert command_from_json('{"command_id": 1.0}').type is CommandType.QUIT


@pytest.mark.parametrize(
    "message",
    [
        "not json",
        "",
        "[1, 2]",
        "{}",
        '{"command_id": "1"}',
        '{"command_id": true}',
        '{"command_id": null}',
        '{"command_id": 9}',
        '{"command_id": -1}',
        '{"command_id": 3}',
        '{"command_id": 3, "extra": {}}',
        '{"command_id": 3, "extra": "path"}',
        '{"command_id": 4, "extra": {"path": 7}}',
    ],
)
def test_invalid_messages(message):
    with pytest.raises(InvalidCommandError):
        command_from_json(message)


def test_invalid_command_error_is_value_error():
    with pytest.raises(ValueError):
        command_from_json("{")