import json
import os

from sspa.state import (
    ResourceState,
    descriptor_present,
    load_state,
    save_state,
    write_json_atomic,
)


def test_descriptor_present(tmp_path):
    path = tmp_path / "pool_info.json"
    assert not descriptor_present(str(path))
    path.write_text("")
    assert not descriptor_present(str(path))
    path.write_text("{}")
    assert descriptor_present(str(path))


def test_write_json_atomic_leaves_no_temp_files(tmp_path):
    path = tmp_path / "role_info.json"
    write_json_atomic(str(path), {"Role": {"Arn": "arn:aws:iam::123456789012:role/x"}})
    write_json_atomic(str(path), {"Role": {"Arn": "arn:aws:iam::123456789012:role/y"}})
    assert json.loads(path.read_text())["Role"]["Arn"].endswith("role/y")
    assert os.listdir(tmp_path) == ["role_info.json"]


def test_state_round_trip(tmp_path):
    assert load_state(str(tmp_path)) == {
        "pool": ResourceState.NOT_STARTED,
        "role": ResourceState.NOT_STARTED,
    }
    save_state(str(tmp_path), {"pool": ResourceState.BOUND, "role": ResourceState.CREATED})
    assert json.loads((tmp_path / "state.json").read_text()) == {"pool": "bound", "role": "created"}
    assert load_state(str(tmp_path))["pool"] is ResourceState.BOUND


def test_unreadable_state_is_ignored(tmp_path):
    (tmp_path / "state.json").write_text("{oops")
    assert load_state(str(tmp_path))["role"] is ResourceState.NOT_STARTED


def test_unknown_state_value_is_ignored(tmp_path):
    (tmp_path / "state.json").write_text(json.dumps({"pool": "done", "role": "bound"}))
    assert load_state(str(tmp_path)) == {
        "pool": ResourceState.NOT_STARTED,
        "role": ResourceState.NOT_STARTED,
    }


def test_non_object_state_is_ignored(tmp_path):
    (tmp_path / "state.json").write_text(json.dumps(["pool"]))
    assert load_state(str(tmp_path))["pool"] is ResourceState.NOT_STARTED


def test_unhashable_state_value_is_ignored(tmp_path):
    (tmp_path / "state.json").write_text(json.dumps({"pool": {"status": "bound"}}))
    assert load_state(str(tmp_path))["pool"] is ResourceState.NOT_STARTED
