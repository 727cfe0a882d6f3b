"""
Uploaded File Schemas
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from smarttrack.models.uploaded_file import FileStatus
from smarttrack.schemas.task import TaskRecord
from smarttrack.schemas.user import UserRecord


class FileRecord(BaseModel):
    """File metadata as stored in the files collection"""
    id: str
    task_id: Optional[str] = None
    uploaded_by: Optional[str] = None
    file_name: str
    file_size: int  # Bytes
    file_type: str  # MIME type
    file_url: str  # Placeholder locally, public object URL on the remote backend
    upload_title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: FileStatus = FileStatus.UPLOADED
    created_at: datetime


class FileResponse(FileRecord):
    """File with its task and uploader joined by id"""
    task: Optional[TaskRecord] = None
    uploaded_user: Optional[UserRecord] = None
    size_label: Optional[str] = None  # Human readable, e.g. "1.95 MB"


class FileListResponse(BaseModel):
    files: List[FileResponse]
    total: int
