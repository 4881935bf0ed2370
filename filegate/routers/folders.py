"""Folder registry endpoints."""

from fastapi import APIRouter, Depends, Query

from filegate.models.api.common import ErrorResponse
from filegate.models.api.folders import (
  FolderCreateRequest,
  FolderCreateResponse,
  FolderData,
  FolderListResponse,
)
from filegate.operations.folders import FolderStore
from filegate.routers.dependencies import get_folder_store

router = APIRouter(tags=["Folders"])


@router.post(
  "/folder",
  response_model=FolderCreateResponse,
  operation_id="createFolder",
  summary="Create Folder",
  description="Register a named folder for a user. Nothing is created in the bucket.",
  responses={400: {"description": "Missing name or uid", "model": ErrorResponse}},
)
def create_folder(
  request: FolderCreateRequest,
  store: FolderStore = Depends(get_folder_store),
) -> FolderCreateResponse:
  folder = store.create(request.name, request.uid)
  return FolderCreateResponse(data=FolderData(**folder.to_dict()))


@router.get(
  "/folders",
  response_model=FolderListResponse,
  operation_id="listFolders",
  summary="List Folders",
  description="List the folders registered for a user, oldest first.",
  responses={400: {"description": "Missing uid", "model": ErrorResponse}},
)
def list_folders(
  uid: str | None = Query(None, description="Owner user id"),
  store: FolderStore = Depends(get_folder_store),
) -> FolderListResponse:
  folders = store.list_by_owner(uid)
  return FolderListResponse(
    folders=[FolderData(**folder.to_dict()) for folder in folders]
  )
