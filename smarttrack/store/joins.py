"""
Reference resolution for joined reads.

Foreign-key-like fields (assigned_to, created_by, task_id, uploaded_by) are
never validated on write, so a lookup can come back empty. ``resolve`` says
which case happened instead of just returning None.
"""

from dataclasses import dataclass
from typing import Dict, Generic, Iterable, Optional, TypeVar
import enum

from smarttrack.schemas import FileRecord, FileResponse, TaskRecord, TaskResponse, UserRecord
from smarttrack.utils.formatting import format_file_size

T = TypeVar("T")


class RefState(str, enum.Enum):
    FOUND = "found"
    DANGLING = "dangling"  # id set but no such record
    UNSET = "unset"  # no id on the record


@dataclass(frozen=True)
class Resolution(Generic[T]):
    state: RefState
    record: Optional[T] = None


def index_by_id(records: Iterable[T]) -> Dict[str, T]:
    """Map id -> record; on duplicate ids the first one wins, like a linear find"""
    index: Dict[str, T] = {}
    for record in records:
        index.setdefault(record.id, record)
    return index


def resolve(index: Dict[str, T], ref: Optional[str]) -> Resolution[T]:
    if not ref:
        return Resolution(RefState.UNSET)
    record = index.get(ref)
    if record is None:
        return Resolution(RefState.DANGLING)
    return Resolution(RefState.FOUND, record)


def join_task(task: TaskRecord, users: Dict[str, UserRecord]) -> TaskResponse:
    """Attach assigned_user / created_user; dangling ids come back as None"""
    return TaskResponse(
        **task.model_dump(),
        assigned_user=resolve(users, task.assigned_to).record,
        created_user=resolve(users, task.created_by).record,
    )


def join_file(
    file: FileRecord,
    tasks: Dict[str, TaskRecord],
    users: Dict[str, UserRecord],
) -> FileResponse:
    """Attach task / uploaded_user and a display size"""
    return FileResponse(
        **file.model_dump(),
        task=resolve(tasks, file.task_id).record,
        uploaded_user=resolve(users, file.uploaded_by).record,
        size_label=format_file_size(file.file_size),
    )
