"""
Uploaded File Model - Upload status enumeration
"""

import enum


class FileStatus(str, enum.Enum):
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    ERROR = "error"
