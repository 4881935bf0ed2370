"""
File storage endpoints.

Every object key lives under ``archivos/{uid}/``; delete and download only
check that the requested ``fileName`` starts with the caller's prefix.
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from filegate.exceptions import ValidationError
from filegate.logger import api_logger as logger
from filegate.models.api.common import ErrorResponse
from filegate.models.api.files import (
  DeleteFileResponse,
  DownloadUrlResponse,
  FileListResponse,
  UploadedFileData,
  UploadResponse,
)
from filegate.operations.storage import B2StorageService, require_owner
from filegate.routers.dependencies import get_storage_service

router = APIRouter(tags=["Files"])

UPSTREAM_ERROR_RESPONSE = {
  "description": "Object store call failed",
  "model": ErrorResponse,
}


def _clean(value: str | None) -> str:
  return value.strip() if value else ""


@router.post(
  "/upload",
  response_model=UploadResponse,
  operation_id="uploadFile",
  summary="Upload File",
  description="Upload a file to `archivos/{uid}/[{carpeta}/]{filename}`.",
  responses={
    400: {"description": "Missing file or uid", "model": ErrorResponse},
    500: UPSTREAM_ERROR_RESPONSE,
  },
)
def upload_file(
  archivo: UploadFile | None = File(None, description="File content"),
  uid: str | None = Form(None, description="Owner user id"),
  carpeta: str | None = Form(None, description="Optional folder name"),
  storage: B2StorageService = Depends(get_storage_service),
) -> UploadResponse:
  """
  Read the upload fully into memory and store it in the bucket.

  The spooled temporary file backing the upload is closed whether or not the
  object store call succeeds.
  """
  uid = _clean(uid)
  carpeta = _clean(carpeta) or None

  if archivo is None or not archivo.filename:
    raise ValidationError("No file was uploaded", fields=["archivo"])

  try:
    if not uid:
      raise ValidationError("uid is required", fields=["uid"])

    data = archivo.file.read()
    uploaded = storage.upload_file(
      uid,
      archivo.filename,
      data,
      carpeta=carpeta,
      content_type=archivo.content_type,
    )
  finally:
    archivo.file.close()

  return UploadResponse(
    data=UploadedFileData(file_id=uploaded.file_id, file_name=uploaded.file_name)
  )


@router.get(
  "/files",
  response_model=FileListResponse,
  operation_id="listFiles",
  summary="List Files",
  description=(
    "List up to 100 files under `archivos/{uid}/`. "
    "Without a uid the listing spans every user."
  ),
  responses={500: UPSTREAM_ERROR_RESPONSE},
)
def list_files(
  uid: str | None = Query(None, description="Owner user id"),
  storage: B2StorageService = Depends(get_storage_service),
) -> FileListResponse:
  uid = _clean(uid)
  if not uid:
    logger.warning("Listing files without uid - results span all users")

  return FileListResponse(files=storage.list_files(uid or None))


@router.delete(
  "/file",
  response_model=DeleteFileResponse,
  operation_id="deleteFile",
  summary="Delete File",
  description="Delete one version of a file owned by the caller.",
  responses={
    400: {"description": "Missing fileId, fileName or uid", "model": ErrorResponse},
    403: {"description": "fileName outside the caller's namespace", "model": ErrorResponse},
    500: UPSTREAM_ERROR_RESPONSE,
  },
)
def delete_file(
  file_id: str | None = Query(None, alias="fileId", description="B2 file id"),
  file_name: str | None = Query(None, alias="fileName", description="Object key"),
  uid: str | None = Query(None, description="Owner user id"),
  storage: B2StorageService = Depends(get_storage_service),
) -> DeleteFileResponse:
  uid = _clean(uid)
  if not file_id or not file_name or not uid:
    raise ValidationError(
      "fileId, fileName and uid are required", fields=["fileId", "fileName", "uid"]
    )

  require_owner(file_name, uid, action="delete")
  return DeleteFileResponse(data=storage.delete_file(file_id, file_name))


@router.get(
  "/download",
  response_model=DownloadUrlResponse,
  operation_id="getDownloadUrl",
  summary="Get Download URL",
  description="Issue a signed download URL valid for one hour.",
  responses={
    400: {"description": "Missing fileName or uid", "model": ErrorResponse},
    403: {"description": "fileName outside the caller's namespace", "model": ErrorResponse},
    500: UPSTREAM_ERROR_RESPONSE,
  },
)
def get_download_url(
  file_name: str | None = Query(None, alias="fileName", description="Object key"),
  uid: str | None = Query(None, description="Owner user id"),
  storage: B2StorageService = Depends(get_storage_service),
) -> DownloadUrlResponse:
  uid = _clean(uid)
  if not file_name or not uid:
    raise ValidationError("fileName and uid are required", fields=["fileName", "uid"])

  require_owner(file_name, uid, action="download")
  return DownloadUrlResponse(signed_url=storage.get_signed_url(file_name))
