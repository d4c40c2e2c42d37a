import pytest

from src.worktime.worktime.common.deletion import remove_record
from src.worktime.worktime.common.resilience import read_or_empty
from src.worktime.worktime.core.enums import DeletionPolicy
from src.worktime.worktime.core.exceptions import TransientIOError


def test_transient_read_failure_degrades_to_empty(caplog):
    def load():
        raise TransientIOError("offline")

    assert read_or_empty(load, what="users") == []
    assert "Could not load users" in caplog.text


def test_other_errors_propagate():
    def load():
        raise KeyError("bug")

    with pytest.raises(KeyError):
        read_or_empty(load, what="users")


class RecordingRepo:
    def __init__(self):
        self.calls = []

    def set_active(self, record_id, *, is_active):
        self.calls.append(("set_active", record_id, is_active))
        return True

    def delete_by_id(self, record_id):
        self.calls.append(("delete", record_id))
        return True


def test_soft_delete_deactivates():
    repo = RecordingRepo()
    remove_record(repo, DeletionPolicy.SOFT_DELETE, "emp-1")
    assert repo.calls == [("set_active", "emp-1", False)]


def test_hard_delete_removes():
    repo = RecordingRepo()
    remove_record(repo, DeletionPolicy.HARD_DELETE, "time-1")
    assert repo.calls == [("delete", "time-1")]
