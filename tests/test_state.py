import json

import pytest

from proctrack.process_data import ProcessInfo
from proctrack.state import StateError, TrackerState


@pytest.fixture
def state(tmp_path):
    return TrackerState(tmp_path / "data.json")


def _paths(processes):
    return [process.info.exe_path for process in processes]


def test_startup_creates_empty_data_file(state):
    state.set_up_on_startup()
    assert json.loads(state.data_file.read_text()) == {"processes_to_track": []}
    assert state.tracked == []


def test_startup_rejects_invalid_json(state):
    state.data_file.write_text("{ not json")
    with pytest.raises(StateError):
        state.set_up_on_startup()


def test_startup_rejects_missing_key(state):
    state.data_file.write_text('{"other": []}')
    with pytest.raises(StateError):
        state.set_up_on_startup()


def test_startup_rejects_malformed_record(state):
    state.data_file.write_text('{"processes_to_track": [{"start": 1}]}')
    with pytest.raises(StateError):
        state.set_up_on_startup()


def test_save_and_load_round_trip(state, tmp_path):
    state.add_process_to_track("/opt/app/one")
    state.add_process_to_track("/opt/app/two")
    state.save()

    loaded = TrackerState(state.data_file)
    loaded.set_up_on_startup()
    assert _paths(loaded.tracked) == ["/opt/app/one", "/opt/app/two"]
    assert all(process.is_tracked for process in loaded.tracked)
    assert [p.to_json()["data"] for p in loaded.tracked] == [
        p.to_json()["data"] for p in state.tracked
    ]


def test_update_adds_and_removes_active_processes(state):
    info = ProcessInfo(pid=7, exe_path="/usr/bin/editor", creation_time=11)
    state.update_state([info])
    assert _paths(state.currently_active) == ["/usr/bin/editor"]
    assert state.currently_active[0].is_active
    assert not state.currently_active[0].was_updated

    state.update_state([info])
    assert len(state.currently_active) == 1

    state.update_state([])
    assert state.currently_active == []


def test_track_moves_active_process(state):
    state.update_state([ProcessInfo(exe_path="/bin/app")])
    state.add_process_to_track("/bin/app")
    assert state.currently_active == []
    assert _paths(state.tracked) == ["/bin/app"]
    assert state.tracked[0].is_tracked
    assert state.tracked[0].is_active


def test_tracked_process_records_session_when_it_stops(state):
    info = ProcessInfo(exe_path="/bin/app")
    state.update_state([info])
    state.add_process_to_track("/bin/app")
    state.update_state([info])
    assert state.tracked[0].sessions == []

    state.update_state([])
    process = state.tracked[0]
    assert not process.is_active
    assert len(process.sessions) == 1
    assert process.sessions[0].start_time <= process.sessions[0].end_time
    assert state.currently_active == []


def test_tracking_twice_raises(state):
    state.add_process_to_track("/bin/app")
    with pytest.raises(StateError):
        state.add_process_to_track("/bin/app")
    assert len(state.tracked) == 1


def test_untrack(state):
    state.add_process_to_track("/bin/app")
    state.add_process_to_track("/bin/other")
    state.remove_process_from_track("/bin/app")
    assert _paths(state.tracked) == ["/bin/other"]


def test_untrack_unknown_raises(state):
    with pytest.raises(StateError):
        state.remove_process_from_track("/bin/missing")


def test_report_lists_both_groups(state):
    state.update_state([ProcessInfo(exe_path="/bin/running", creation_time=3)])
    state.add_process_to_track("/bin/watched")
    report = state.report()
    assert [p["data"]["exe_path"] for p in report["tracked"]] == ["/bin/watched"]
    assert [p["data"]["exe_path"] for p in report["currently_active"]] == ["/bin/running"]
    assert json.loads(json.dumps(report)) == report