"""Request and response models, one module per router."""

from .common import ErrorResponse, HealthStatus
from .files import (
  DeleteFileResponse,
  DownloadUrlResponse,
  FileListResponse,
  UploadedFileData,
  UploadResponse,
)
from .folders import (
  FolderCreateRequest,
  FolderCreateResponse,
  FolderData,
  FolderListResponse,
)
from .notifications import NotificationRequest, NotificationResponse

__all__ = [
  "DeleteFileResponse",
  "DownloadUrlResponse",
  "ErrorResponse",
  "FileListResponse",
  "FolderCreateRequest",
  "FolderCreateResponse",
  "FolderData",
  "FolderListResponse",
  "HealthStatus",
  "NotificationRequest",
  "NotificationResponse",
  "UploadResponse",
  "UploadedFileData",
]
