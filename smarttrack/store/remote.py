"""
Remote Store - Hosted database-as-a-service backend with a mock fallback

Usage:
    from smarttrack.store.remote import RemoteClient, RemoteStore

    client = RemoteClient.from_settings(settings)
    store = RemoteStore(client)
    tasks = store.list_tasks()

When REMOTE_URL or REMOTE_KEY is missing, the client is marked unconfigured
and every store call answers from the bootstrap dataset instead of the
network. Mock writes are echoed back but never persisted.
"""

from pydantic_core import to_jsonable_python
from typing import Any, Dict, List, Mapping, Optional
import copy
import logging
import time
import uuid

import httpx

from smarttrack.core.exceptions import InvalidCredentialsError, RecordNotFoundError, StoreTransportError
from smarttrack.schemas import (
    WRITABLE_TASK_FIELDS,
    FileRecord,
    FileResponse,
    TaskRecord,
    TaskResponse,
    UserRecord,
)
from smarttrack.store.base import WRITABLE_FILE_FIELDS, DataStore, new_id, validate_record, writable
from smarttrack.store.joins import index_by_id, join_file, join_task
from smarttrack.store.seed import DEFAULT_FILES, DEFAULT_TASKS, DEFAULT_USERS
from smarttrack.utils.formatting import format_file_size, placeholder_url
from smarttrack.utils.timestamps import next_timestamp, utcnow

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
TASKS_TABLE = "tasks"
FILES_TABLE = "uploaded_files"

# Embedded joins resolved by the remote query layer
TASK_COLUMNS = "*,assigned_user:assigned_to(*),created_user:created_by(*)"
FILE_COLUMNS = "*,task:task_id(*),uploaded_user:uploaded_by(*)"


class RemoteClient:
    """
    Thin request/response client for a PostgREST-style table API plus an
    object storage bucket.

    One HTTP request per call: no retry, no backoff. Any failure is raised
    as StoreTransportError with the remote message attached.
    """

    def __init__(
        self,
        url: str,
        key: str,
        bucket: str = "task-files",
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.bucket = bucket
        self.configured = bool(url and key)
        self._http: Optional[httpx.Client] = None
        if self.configured:
            self._http = httpx.Client(
                base_url=self.url,
                headers={"apikey": key, "Authorization": f"Bearer {key}"},
                timeout=timeout,
                transport=transport,
            )

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.BaseTransport] = None) -> "RemoteClient":
        return cls(
            url=settings.REMOTE_URL,
            key=settings.REMOTE_KEY,
            bucket=settings.REMOTE_BUCKET,
            timeout=settings.REMOTE_TIMEOUT,
            transport=transport,
        )

    def close(self) -> None:
        if self._http is not None:
            self._http.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        if self._http is None:
            raise StoreTransportError("Remote backend is not configured")
        try:
            response = self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"❌ {method} {path} -> {e.response.status_code}: {e.response.text}")
            raise StoreTransportError(
                f"{method} {path} failed: {e.response.text or e.response.reason_phrase}",
                status=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"❌ {method} {path} failed: {e}")
            raise StoreTransportError(f"{method} {path} failed: {e}") from e
        return response

    @staticmethod
    def _params(filters: Optional[Mapping[str, Any]], columns: Optional[str] = None) -> Dict[str, str]:
        params = {column: f"eq.{value}" for column, value in (filters or {}).items() if value is not None}
        if columns:
            params["select"] = columns
        return params

    # Tables

    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[str] = None,
        columns: str = "*",
    ) -> List[Dict[str, Any]]:
        params = self._params(filters, columns)
        if order:
            params["order"] = order
        return self._request("GET", f"/rest/v1/{table}", params=params).json()

    def insert(self, table: str, row: Mapping[str, Any], columns: str = "*") -> Dict[str, Any]:
        response = self._request(
            "POST",
            f"/rest/v1/{table}",
            params={"select": columns},
            json=[dict(row)],
            headers={"Prefer": "return=representation"},
        )
        return response.json()[0]

    def update(
        self,
        table: str,
        filters: Mapping[str, Any],
        values: Mapping[str, Any],
        columns: str = "*",
    ) -> List[Dict[str, Any]]:
        response = self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=self._params(filters, columns),
            json=dict(values),
            headers={"Prefer": "return=representation"},
        )
        return response.json()

    def delete(self, table: str, filters: Mapping[str, Any]) -> None:
        self._request("DELETE", f"/rest/v1/{table}", params=self._params(filters))

    # Object storage

    def upload_object(self, path: str, content: bytes, content_type: str) -> None:
        self._request(
            "POST",
            f"/storage/v1/object/{self.bucket}/{path}",
            content=content,
            headers={"Content-Type": content_type or "application/octet-stream"},
        )

    def public_url(self, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{path}"

    def remove_objects(self, paths: List[str]) -> None:
        self._request("DELETE", f"/storage/v1/object/{self.bucket}", json={"prefixes": paths})


def _object_path(file_name: str) -> str:
    """uploads/<millis>-<random>.<ext> - unique per upload, keeps the extension"""
    ext = file_name.rsplit(".", 1)[-1] if "." in file_name else "bin"
    return f"uploads/{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}.{ext}"


class RemoteStore(DataStore):
    """DataStore over RemoteClient, answering from mock data when unconfigured"""

    backend = "remote"

    def __init__(self, client: RemoteClient):
        self.client = client

    @property
    def is_mock(self) -> bool:
        return not self.client.configured

    def initialize(self) -> None:
        """Tables are managed on the remote side"""
        logger.debug(f"Remote store ready (mock={self.is_mock})")

    # Mock data

    @staticmethod
    def _mock_users() -> List[UserRecord]:
        return [UserRecord.model_validate(row) for row in DEFAULT_USERS]

    @staticmethod
    def _mock_tasks() -> List[TaskRecord]:
        return [TaskRecord.model_validate(row) for row in copy.deepcopy(DEFAULT_TASKS)]

    # Users

    def list_users(self, role: Optional[str] = None) -> List[UserRecord]:
        if self.is_mock:
            users = self._mock_users()
            return [user for user in users if user.role.value == role] if role else users

        rows = self.client.select(USERS_TABLE, filters={"role": role}, order="name")
        return [UserRecord.model_validate(row) for row in rows]

    def authenticate(self, email: str, role: str) -> UserRecord:
        if self.is_mock:
            for user in self._mock_users():
                if user.email == email and user.role.value == role:
                    return user
            raise InvalidCredentialsError()

        rows = self.client.select(USERS_TABLE, filters={"email": email, "role": role})
        if not rows:
            raise InvalidCredentialsError()
        return UserRecord.model_validate(rows[0])

    # Tasks

    def list_tasks(self) -> List[TaskResponse]:
        if self.is_mock:
            users = index_by_id(self._mock_users())
            return [join_task(task, users) for task in self._mock_tasks()]

        rows = self.client.select(TASKS_TABLE, columns=TASK_COLUMNS, order="created_at.desc")
        return [TaskResponse.model_validate(row) for row in rows]

    def create_task(self, fields: Mapping[str, Any]) -> TaskResponse:
        data = writable(fields, WRITABLE_TASK_FIELDS)
        if self.is_mock:
            now = utcnow()
            task = validate_record(TaskRecord, {**data, "id": new_id(), "created_at": now, "updated_at": now})
            return join_task(task, index_by_id(self._mock_users()))

        row = self.client.insert(TASKS_TABLE, to_jsonable_python(data), columns=TASK_COLUMNS)
        logger.info(f"✅ Remote task created: {row.get('id')}")
        return TaskResponse.model_validate(row)

    def update_task(self, task_id: str, fields: Mapping[str, Any]) -> TaskResponse:
        data = writable(fields, WRITABLE_TASK_FIELDS)
        if self.is_mock:
            current = next((t for t in self._mock_tasks() if t.id == task_id), None)
            if current is None:
                raise RecordNotFoundError("task", task_id)
            task = validate_record(TaskRecord, {
                **current.model_dump(),
                **data,
                "updated_at": next_timestamp(current.updated_at),
            })
            return join_task(task, index_by_id(self._mock_users()))

        values = {**to_jsonable_python(data), "updated_at": utcnow().isoformat()}
        rows = self.client.update(TASKS_TABLE, {"id": task_id}, values, columns=TASK_COLUMNS)
        if not rows:
            raise RecordNotFoundError("task", task_id)
        logger.info(f"✅ Remote task updated: {task_id}")
        return TaskResponse.model_validate(rows[0])

    def delete_task(self, task_id: str) -> bool:
        if self.is_mock:
            return True
        self.client.delete(TASKS_TABLE, {"id": task_id})
        logger.info(f"🗑️  Remote task deleted: {task_id}")
        return True

    # Files

    @staticmethod
    def _file_response(row: Dict[str, Any]) -> FileResponse:
        return FileResponse.model_validate({**row, "size_label": format_file_size(row.get("file_size") or 0)})

    def list_files(self, task_id: Optional[str] = None, user_id: Optional[str] = None) -> List[FileResponse]:
        if self.is_mock:
            files = [FileRecord.model_validate(row) for row in DEFAULT_FILES]
            if task_id:
                files = [f for f in files if f.task_id == task_id]
            if user_id:
                files = [f for f in files if f.uploaded_by == user_id]
            tasks = index_by_id(self._mock_tasks())
            users = index_by_id(self._mock_users())
            return [join_file(f, tasks, users) for f in files]

        rows = self.client.select(
            FILES_TABLE,
            filters={"task_id": task_id, "uploaded_by": user_id},
            columns=FILE_COLUMNS,
            order="created_at.desc",
        )
        return [self._file_response(row) for row in rows]

    def upload_file(self, fields: Mapping[str, Any], content: Optional[bytes] = None) -> FileResponse:
        data = writable(fields, WRITABLE_FILE_FIELDS)
        if self.is_mock:
            record = validate_record(FileRecord, {
                **data,
                "id": new_id(),
                "file_url": placeholder_url(data.get("file_name") or ""),
                "status": "uploaded",
                "created_at": utcnow(),
            })
            return join_file(record, index_by_id(self._mock_tasks()), index_by_id(self._mock_users()))

        path = _object_path(data.get("file_name") or "")
        self.client.upload_object(path, content or b"", data.get("file_type") or "")
        row = self.client.insert(
            FILES_TABLE,
            {**to_jsonable_python(data), "file_url": self.client.public_url(path), "status": "uploaded"},
            columns=FILE_COLUMNS,
        )
        logger.info(f"📎 Remote file uploaded: {path}")
        return self._file_response(row)

    def delete_file(self, file_id: str) -> bool:
        if self.is_mock:
            return True

        rows = self.client.select(FILES_TABLE, filters={"id": file_id}, columns="file_url")
        if not rows:
            logger.debug(f"File {file_id} not present, nothing to delete")
            return True

        object_name = rows[0]["file_url"].rsplit("/", 1)[-1]
        try:
            self.client.remove_objects([f"uploads/{object_name}"])
        except StoreTransportError as e:
            # Row removal still goes ahead; the orphaned object is only logged
            logger.error(f"❌ Failed to delete stored object for file {file_id}: {e.message}")

        self.client.delete(FILES_TABLE, {"id": file_id})
        logger.info(f"🗑️  Remote file deleted: {file_id}")
        return True
