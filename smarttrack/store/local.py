"""
Local Store - Collections kept as JSON documents in key-value storage
"""

from typing import Any, Dict, List, Mapping, Optional
import copy
import logging

from smarttrack.core.exceptions import InvalidCredentialsError, RecordNotFoundError
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
from smarttrack.store.session import SESSION_KEY
from smarttrack.store.storage import KeyValueStorage
from smarttrack.utils.formatting import placeholder_url
from smarttrack.utils.timestamps import next_timestamp, utcnow

logger = logging.getLogger(__name__)

USERS_KEY = "users"
TASKS_KEY = "tasks"
FILES_KEY = "files"

DEFAULT_COLLECTIONS = {
    USERS_KEY: DEFAULT_USERS,
    TASKS_KEY: DEFAULT_TASKS,
    FILES_KEY: DEFAULT_FILES,
}


class LocalStore(DataStore):
    """
    Store backed by KeyValueStorage.

    Every read parses the full collection from storage and every write
    serializes and replaces the full collection. New records are prepended,
    so collections read most-recent-first.
    """

    backend = "local"

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def initialize(self) -> None:
        """Seed any collection key that does not exist yet"""
        for name, rows in DEFAULT_COLLECTIONS.items():
            if self.storage.seed_json(name, copy.deepcopy(rows)):
                logger.info(f"🌱 Seeded {self.storage.key(name)} with {len(rows)} records")

    def reset(self) -> None:
        """Drop every collection and the session (next access re-seeds)"""
        for name in (*DEFAULT_COLLECTIONS, SESSION_KEY):
            self.storage.remove(name)
        logger.info("🧹 Cleared all stored data")

    def _read(self, name: str) -> List[Dict[str, Any]]:
        self.initialize()
        return self.storage.get_json(name) or []

    def _write(self, name: str, rows: List[Dict[str, Any]]) -> None:
        self.storage.set_json(name, rows)

    def _user_index(self) -> Dict[str, UserRecord]:
        return index_by_id(self.list_users())

    # Users

    def list_users(self, role: Optional[str] = None) -> List[UserRecord]:
        users = [UserRecord.model_validate(row) for row in self._read(USERS_KEY)]
        if role:
            users = [user for user in users if user.role.value == role]
        return users

    def authenticate(self, email: str, role: str) -> UserRecord:
        for user in self.list_users():
            if user.email == email and user.role.value == role:
                return user
        raise InvalidCredentialsError()

    # Tasks

    def _task_records(self) -> List[TaskRecord]:
        return [TaskRecord.model_validate(row) for row in self._read(TASKS_KEY)]

    def list_tasks(self) -> List[TaskResponse]:
        users = self._user_index()
        return [join_task(task, users) for task in self._task_records()]

    def create_task(self, fields: Mapping[str, Any]) -> TaskResponse:
        rows = self._read(TASKS_KEY)
        now = utcnow()
        task = validate_record(TaskRecord, {
            **writable(fields, WRITABLE_TASK_FIELDS),
            "id": new_id(),
            "created_at": now,
            "updated_at": now,
        })

        rows.insert(0, task.model_dump(mode="json"))
        self._write(TASKS_KEY, rows)
        logger.info(f"✅ Task created: {task.id} '{task.title}'")
        return join_task(task, self._user_index())

    def update_task(self, task_id: str, fields: Mapping[str, Any]) -> TaskResponse:
        rows = self._read(TASKS_KEY)
        index = next((i for i, row in enumerate(rows) if row.get("id") == task_id), -1)
        if index == -1:
            raise RecordNotFoundError("task", task_id)

        previous = TaskRecord.model_validate(rows[index])
        task = validate_record(TaskRecord, {
            **rows[index],
            **writable(fields, WRITABLE_TASK_FIELDS),
            "updated_at": next_timestamp(previous.updated_at),
        })

        rows[index] = task.model_dump(mode="json")
        self._write(TASKS_KEY, rows)
        logger.info(f"✅ Task updated: {task_id} ({', '.join(fields) or 'no fields'})")
        return join_task(task, self._user_index())

    def delete_task(self, task_id: str) -> bool:
        rows = self._read(TASKS_KEY)
        remaining = [row for row in rows if row.get("id") != task_id]
        if len(remaining) == len(rows):
            logger.debug(f"Task {task_id} not present, nothing to delete")
            return True
        self._write(TASKS_KEY, remaining)
        logger.info(f"🗑️  Task deleted: {task_id}")
        return True

    # Files

    def list_files(self, task_id: Optional[str] = None, user_id: Optional[str] = None) -> List[FileResponse]:
        files = [FileRecord.model_validate(row) for row in self._read(FILES_KEY)]
        if task_id:
            files = [f for f in files if f.task_id == task_id]
        if user_id:
            files = [f for f in files if f.uploaded_by == user_id]

        tasks = index_by_id(self._task_records())
        users = self._user_index()
        return [join_file(f, tasks, users) for f in files]

    def upload_file(self, fields: Mapping[str, Any], content: Optional[bytes] = None) -> FileResponse:
        """Record file metadata only - bytes are not stored locally"""
        rows = self._read(FILES_KEY)
        data = writable(fields, WRITABLE_FILE_FIELDS)
        record = validate_record(FileRecord, {
            **data,
            "id": new_id(),
            "file_url": placeholder_url(data.get("file_name") or ""),
            "status": "uploaded",
            "created_at": utcnow(),
        })

        rows.insert(0, record.model_dump(mode="json"))
        self._write(FILES_KEY, rows)
        logger.info(f"📎 File recorded: {record.id} '{record.file_name}' ({record.file_size} bytes)")
        return join_file(record, index_by_id(self._task_records()), self._user_index())

    def delete_file(self, file_id: str) -> bool:
        rows = self._read(FILES_KEY)
        remaining = [row for row in rows if row.get("id") != file_id]
        if len(remaining) == len(rows):
            logger.debug(f"File {file_id} not present, nothing to delete")
            return True
        self._write(FILES_KEY, remaining)
        logger.info(f"🗑️  File deleted: {file_id}")
        return True
