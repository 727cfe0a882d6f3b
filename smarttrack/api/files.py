"""
Files API - Upload records attached to tasks
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status
from typing import Optional
import logging

from smarttrack.core.config import settings
from smarttrack.core.dependencies import get_current_user, get_store
from smarttrack.schemas import FileListResponse, FileResponse, UserRecord
from smarttrack.store import DataStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""


@router.get("", response_model=FileListResponse)
def list_files(
    task_id: Optional[str] = Query(None, description="Only files attached to this task"),
    user_id: Optional[str] = Query(None, description="Only files uploaded by this user"),
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    files = store.list_files(task_id=task_id, user_id=user_id)
    logger.info(f"✅ Returning {len(files)} files")
    return FileListResponse(files=files, total=len(files))


@router.post("", response_model=FileResponse, status_code=status.HTTP_201_CREATED)
def upload_file(
    file: UploadFile = File(...),
    task_id: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """
    Upload a file for a task.

    The local backend records metadata and a placeholder URL only; the
    remote backend also stores the bytes in its bucket.

    Raises:
        400: Extension not allowed
        413: File larger than MAX_UPLOAD_SIZE
    """
    file_name = file.filename or ""
    logger.info(f"➡️  Upload '{file_name}' by {current_user.email}")

    if _extension(file_name) not in settings.ALLOWED_EXTENSIONS:
        logger.warning(f"⚠️  Rejected upload with extension '{_extension(file_name)}'")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type. Allowed: {', '.join(settings.ALLOWED_EXTENSIONS)}",
        )

    content = file.file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        logger.warning(f"⚠️  Rejected upload of {len(content)} bytes")
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the maximum size of {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB",
        )

    return store.upload_file(
        {
            "task_id": task_id or None,
            "uploaded_by": current_user.id,
            "file_name": file_name,
            "file_size": len(content),
            "file_type": file.content_type or "application/octet-stream",
            "upload_title": title,
            "description": description,
            "category": category,
        },
        content=content,
    )


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(
    file_id: str,
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """Delete a file record; unknown ids succeed without effect"""
    logger.info(f"➡️  Delete file {file_id} by {current_user.email}")
    store.delete_file(file_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
