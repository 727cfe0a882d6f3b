"""
Remote store: mock fallback when unconfigured, request shapes when configured
"""
import json

import httpx
import pytest

from smarttrack.core.exceptions import InvalidCredentialsError, RecordNotFoundError, StoreTransportError
from smarttrack.store import RemoteClient, RemoteStore
from smarttrack.store.seed import DEFAULT_TASKS, DEFAULT_USERS

BASE_URL = "https://db.university.edu"


def _remote(handler) -> RemoteStore:
    client = RemoteClient(BASE_URL, "anon-key", transport=httpx.MockTransport(handler))
    return RemoteStore(client)


class Recorder:
    """MockTransport handler that records requests and replays queued responses"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses.pop(0)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


def _task_row(**overrides):
    row = {**DEFAULT_TASKS[0], "assigned_user": DEFAULT_USERS[2], "created_user": DEFAULT_USERS[0]}
    row.update(overrides)
    return row


# Unconfigured: mock responses

@pytest.fixture
def mock_store():
    return RemoteStore(RemoteClient("", ""))


def test_unconfigured_store_serves_mock_data(mock_store):
    assert mock_store.is_mock
    tasks = mock_store.list_tasks()

    assert [t.id for t in tasks] == ["1", "2", "3"]
    assert tasks[0].assigned_user.name == "Dr. Smith"
    assert len(mock_store.list_users("staff")) == 3
    assert [f.id for f in mock_store.list_files(task_id="2")] == ["2"]


def test_unconfigured_writes_are_echoed_not_persisted(mock_store):
    created = mock_store.create_task({"title": "T1", "assigned_to": "3"})

    assert created.assigned_user.name == "Dr. Smith"
    assert all(t.id != created.id for t in mock_store.list_tasks())

    updated = mock_store.update_task("2", {"status": "completed"})
    assert updated.status.value == "completed"
    assert mock_store.get_task("2").status.value == "pending"

    assert mock_store.delete_task("1") is True
    assert mock_store.delete_file("1") is True
    assert len(mock_store.list_tasks()) == 3


def test_unconfigured_update_of_unknown_task_raises(mock_store):
    with pytest.raises(RecordNotFoundError):
        mock_store.update_task("nope", {"title": "x"})


def test_unconfigured_authenticate(mock_store):
    assert mock_store.authenticate("staff@university.edu", "staff").id == "3"
    with pytest.raises(InvalidCredentialsError):
        mock_store.authenticate("staff@university.edu", "qa-office")


def test_unconfigured_upload_uses_placeholder(mock_store):
    uploaded = mock_store.upload_file({"file_name": "a.pdf", "file_size": 10, "file_type": "application/pdf"})

    assert uploaded.file_url.startswith("/placeholder.svg")


# Configured: request/response round trips

def test_list_tasks_requests_embedded_joins():
    recorder = Recorder((200, [_task_row(), _task_row(id="9", assigned_to="77", assigned_user=None)]))
    store = _remote(recorder)

    tasks = store.list_tasks()

    request = recorder.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/tasks"
    assert request.url.params["order"] == "created_at.desc"
    assert "assigned_user:assigned_to(*)" in request.url.params["select"]
    assert request.headers["apikey"] == "anon-key"
    assert tasks[0].assigned_user.name == "Dr. Smith"
    assert tasks[1].assigned_user is None


def test_list_users_filters_by_role():
    recorder = Recorder((200, [DEFAULT_USERS[1]]))
    store = _remote(recorder)

    users = store.list_users("department-head")

    params = recorder.requests[0].url.params
    assert params["role"] == "eq.department-head"
    assert params["order"] == "name"
    assert users[0].name == "Prof. Johnson"


def test_authenticate_with_no_rows_fails():
    store = _remote(Recorder((200, [])))

    with pytest.raises(InvalidCredentialsError):
        store.authenticate("ghost@university.edu", "staff")


def test_create_task_inserts_and_returns_representation():
    recorder = Recorder((201, [_task_row(id="abc", title="T1")]))
    store = _remote(recorder)

    created = store.create_task({"title": "T1", "assigned_to": "3", "priority": "high", "id": "ignored"})

    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.headers["Prefer"] == "return=representation"
    body = json.loads(request.content)
    assert body == [{"title": "T1", "assigned_to": "3", "priority": "high"}]
    assert created.id == "abc"


def test_update_task_patches_by_id():
    recorder = Recorder((200, [_task_row(status="completed")]))
    store = _remote(recorder)

    updated = store.update_task("1", {"status": "completed"})

    request = recorder.requests[0]
    assert request.method == "PATCH"
    assert request.url.params["id"] == "eq.1"
    body = json.loads(request.content)
    assert body["status"] == "completed"
    assert "updated_at" in body
    assert updated.status.value == "completed"


def test_update_task_with_no_rows_is_not_found():
    store = _remote(Recorder((200, [])))

    with pytest.raises(RecordNotFoundError):
        store.update_task("missing", {"status": "completed"})


def test_delete_task_sends_single_request():
    recorder = Recorder((204, None))
    store = _remote(recorder)

    assert store.delete_task("1") is True
    assert recorder.requests[0].method == "DELETE"
    assert recorder.requests[0].url.params["id"] == "eq.1"


def test_http_errors_become_transport_errors_without_retry():
    recorder = Recorder((500, {"message": "boom"}))
    store = _remote(recorder)

    with pytest.raises(StoreTransportError) as exc_info:
        store.list_tasks()

    assert exc_info.value.details["status"] == 500
    assert len(recorder.requests) == 1


def test_network_errors_become_transport_errors():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(StoreTransportError):
        _remote(handler).list_users()


def test_upload_stores_object_then_row():
    row = {
        "id": "f1",
        "file_name": "report.pdf",
        "file_size": 3,
        "file_type": "application/pdf",
        "file_url": "x",
        "status": "uploaded",
        "created_at": "2024-02-01T00:00:00Z",
        "task": None,
        "uploaded_user": DEFAULT_USERS[2],
    }
    recorder = Recorder((200, {"Key": "task-files/uploads/x.pdf"}), (201, [row]))
    store = _remote(recorder)

    uploaded = store.upload_file(
        {"file_name": "report.pdf", "file_size": 3, "file_type": "application/pdf", "uploaded_by": "3"},
        content=b"pdf",
    )

    upload, insert = recorder.requests
    assert upload.url.path.startswith("/storage/v1/object/task-files/uploads/")
    assert upload.url.path.endswith(".pdf")
    assert upload.content == b"pdf"
    inserted = json.loads(insert.content)[0]
    assert inserted["file_url"].startswith(f"{BASE_URL}/storage/v1/object/public/task-files/uploads/")
    assert uploaded.uploaded_user.name == "Dr. Smith"
    assert uploaded.size_label == "3 Bytes"


def test_delete_file_continues_when_object_removal_fails():
    recorder = Recorder(
        (200, [{"file_url": f"{BASE_URL}/storage/v1/object/public/task-files/uploads/abc.pdf"}]),
        (500, {"message": "storage down"}),
        (204, None),
    )
    store = _remote(recorder)

    assert store.delete_file("f1") is True

    select, remove, delete = recorder.requests
    assert json.loads(remove.content) == {"prefixes": ["uploads/abc.pdf"]}
    assert delete.method == "DELETE"
    assert delete.url.path == "/rest/v1/uploaded_files"


def test_delete_missing_file_is_noop():
    recorder = Recorder((200, []))
    store = _remote(recorder)

    assert store.delete_file("missing") is True
    assert len(recorder.requests) == 1
