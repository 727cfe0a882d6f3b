"""
Store Interface - Operations every backend provides
"""

from abc import ABC, abstractmethod
from pydantic import ValidationError
from typing import Any, Dict, Iterable, List, Mapping, Optional
import uuid

from smarttrack.core.exceptions import StoreValidationError
from smarttrack.schemas import FileResponse, TaskResponse, UserRecord

WRITABLE_FILE_FIELDS = (
    "task_id",
    "uploaded_by",
    "file_name",
    "file_size",
    "file_type",
    "upload_title",
    "description",
    "category",
)


def new_id() -> str:
    return str(uuid.uuid4())


def writable(fields: Mapping[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    """Keep only caller-settable fields (ids, timestamps and joins are store-owned)"""
    return {key: value for key, value in fields.items() if key in allowed}


def validate_record(model, data: Dict[str, Any]):
    """Build a record model, reporting the first bad field as a StoreValidationError"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(x) for x in first["loc"]) or None
        raise StoreValidationError(first["msg"], field=field) from e


class DataStore(ABC):
    """
    Data-access layer for users, tasks and uploaded files.

    Reads return joined records: related users/tasks are looked up by id at
    read time and attached, never persisted. Missing ids on update raise
    RecordNotFoundError; deletes of missing ids succeed without effect.
    """

    backend = "abstract"

    @abstractmethod
    def initialize(self) -> None:
        """Make sure every collection exists; idempotent"""

    # Users

    @abstractmethod
    def list_users(self, role: Optional[str] = None) -> List[UserRecord]:
        ...

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    @abstractmethod
    def authenticate(self, email: str, role: str) -> UserRecord:
        """Exact email + role match, else InvalidCredentialsError"""

    # Tasks

    @abstractmethod
    def list_tasks(self) -> List[TaskResponse]:
        ...

    def get_task(self, task_id: str) -> Optional[TaskResponse]:
        for task in self.list_tasks():
            if task.id == task_id:
                return task
        return None

    @abstractmethod
    def create_task(self, fields: Mapping[str, Any]) -> TaskResponse:
        ...

    @abstractmethod
    def update_task(self, task_id: str, fields: Mapping[str, Any]) -> TaskResponse:
        ...

    @abstractmethod
    def delete_task(self, task_id: str) -> bool:
        ...

    # Files

    @abstractmethod
    def list_files(self, task_id: Optional[str] = None, user_id: Optional[str] = None) -> List[FileResponse]:
        ...

    @abstractmethod
    def upload_file(self, fields: Mapping[str, Any], content: Optional[bytes] = None) -> FileResponse:
        ...

    @abstractmethod
    def delete_file(self, file_id: str) -> bool:
        ...
