"""
Tests for the TudidiAPI domain accessor against the in-memory fake server.
"""

import pytest

from conftest import BASE_URL, FakeSession, make_response
from tudidi_cli.tudidi_api import (
    CreateTaskRequest,
    DecodeError,
    NotFound,
    ReadonlyViolation,
    SessionClient,
    TaskStatus,
    TudidiAPI,
    UpdateTaskRequest,
    ValidationError,
)


def _api_with(responses, readonly=False):
    session = FakeSession(responses)
    return TudidiAPI(SessionClient(BASE_URL, session=session), readonly=readonly), session


class TestReadonly:
    """Mutations under readonly never touch the network."""

    def test_create(self, server, readonly_api):
        with pytest.raises(ReadonlyViolation):
            readonly_api.create_task(CreateTaskRequest(name="X", project_id=1))
        assert server.calls == []

    def test_update(self, server, readonly_api):
        server.add_task(name="A")
        with pytest.raises(ReadonlyViolation):
            readonly_api.update_task(1, UpdateTaskRequest(name="C"))
        assert server.calls == []

    def test_delete(self, server, readonly_api):
        server.add_task(name="A")
        with pytest.raises(ReadonlyViolation):
            readonly_api.delete_task(1)
        assert server.calls == []
        assert 1 in server.tasks

    def test_blank_create_reports_readonly_first(self, server, readonly_api):
        with pytest.raises(ReadonlyViolation):
            readonly_api.create_task(CreateTaskRequest(name=""))

    def test_reads_still_work(self, server, readonly_api):
        server.add_task(name="A")
        assert [t.name for t in readonly_api.get_tasks()] == ["A"]
        assert len(readonly_api.get_projects()) == 3

    def test_with_readonly_returns_new_accessor(self, api):
        locked = api.with_readonly(True)
        assert locked is not api
        assert locked.readonly is True
        assert api.readonly is False
        assert locked.client is api.client


class TestNotFound:
    def test_get(self, api):
        with pytest.raises(NotFound):
            api.get_task(42)

    def test_update(self, server, api):
        with pytest.raises(NotFound):
            api.update_task(42, UpdateTaskRequest(name="C"))
        assert server.calls_for("PATCH") == []

    def test_delete(self, api):
        with pytest.raises(NotFound):
            api.delete_task(42)

    def test_list_endpoint_404(self):
        api, _ = _api_with([make_response(404)])
        with pytest.raises(NotFound):
            api.get_tasks()


class TestDecodeErrors:
    @pytest.mark.parametrize("call", [
        lambda api: api.get_tasks(),
        lambda api: api.get_task(1),
        lambda api: api.get_projects(),
    ])
    def test_reads(self, call):
        api, _ = _api_with([make_response(200, '{"tasks": [oops')])
        with pytest.raises(DecodeError):
            call(api)

    def test_create(self):
        api, _ = _api_with([make_response(201, "not json")])
        with pytest.raises(DecodeError):
            api.create_task(CreateTaskRequest(name="X"))

    def test_update(self):
        api, _ = _api_with([make_response(200, {"id": 1, "name": "A"}), make_response(200, "<html>")])
        with pytest.raises(DecodeError):
            api.update_task(1, UpdateTaskRequest(name="C"))


def test_list_tasks_preserves_order(server, api):
    for name in ("first", "second", "third"):
        server.add_task(name=name)

    assert [t.name for t in api.get_tasks()] == ["first", "second", "third"]


def test_create_then_fetch_round_trip(server, api):
    created = api.create_task(CreateTaskRequest(name="X", project_id=2))

    fetched = api.get_task(created.id)

    assert fetched.name == "X"
    assert fetched.id == created.id
    assert server.calls_for("POST")[0]["body"] == {"name": "X", "project_id": 2, "status": "not_started"}


def test_get_task_is_idempotent(server, api):
    server.add_task(name="A", note="B", due_date="2025-06-01")

    assert api.get_task(1) == api.get_task(1)


def test_update_merge_keeps_blank_fields(server, api):
    server.add_task(name="A", note="B")

    updated = api.update_task(1, UpdateTaskRequest(name="C", note=""))

    assert updated.name == "C"
    assert updated.note == "B"
    assert server.tasks[1]["note"] == "B"
    assert [c["method"] for c in server.calls] == ["GET", "PATCH"]


def test_update_sends_full_representation(server, api):
    server.add_task(name="A", note="B", priority=2, today=True)

    api.update_task(1, UpdateTaskRequest(note="new note"))

    body = server.calls_for("PATCH")[0]["body"]
    assert body["name"] == "A"
    assert body["note"] == "new note"
    assert body["priority"] == 2
    assert body["today"] is True


def test_update_completed_sets_status(server, api):
    server.add_task(name="A")

    assert api.update_task(1, UpdateTaskRequest(completed=True)).status == TaskStatus.DONE
    assert api.update_task(1, UpdateTaskRequest(completed=False)).status == TaskStatus.NEW


def test_update_without_changes_is_rejected(server, api):
    server.add_task(name="A")

    with pytest.raises(ValidationError, match="no fields to update"):
        api.update_task(1, UpdateTaskRequest())
    assert server.calls == []


def test_delete_accepts_204():
    api, session = _api_with([make_response(204)])

    api.delete_task(5)

    assert session.calls[0]["method"] == "DELETE"
    assert session.calls[0]["path"] == "/api/task/5"


def test_delete_removes_task(server, api):
    server.add_task(name="A")

    api.delete_task(1)

    with pytest.raises(NotFound):
        api.get_task(1)


def test_create_rejects_blank_name(server, api):
    with pytest.raises(ValidationError):
        api.create_task(CreateTaskRequest(name="   "))
    assert server.calls == []


@pytest.mark.parametrize("bad_id", ["abc", "", "-3", 0, -1, "1.5", "\u00b2", "\u2460", True, None])
def test_invalid_ids_are_rejected_before_io(server, api, bad_id):
    with pytest.raises(ValidationError):
        api.get_task(bad_id)
    assert server.calls == []


def test_numeric_string_id_is_accepted(server, api):
    server.add_task(name="A")
    assert api.get_task(" 1 ").name == "A"


class TestSearchProjects:
    def test_empty_query_rejected_without_io(self, server, api):
        with pytest.raises(ValidationError, match="cannot be empty"):
            api.search_projects_by_name("")
        with pytest.raises(ValidationError):
            api.search_projects_by_name("   ")
        assert server.calls == []

    def test_case_insensitive_substring(self, api):
        names = [p.name for p in api.search_projects_by_name("Work")]
        assert names == ["Work Stuff", "workshop"]

    def test_no_match(self, api):
        assert api.search_projects_by_name("garden") == []
