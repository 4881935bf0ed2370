"""
Shared dependencies for API routers.

Collaborators are owned by the application instance (``app.state``) and
resolved per request, so tests can build an app around mocks.
"""

from fastapi import Request

from filegate.operations.email import NotificationService
from filegate.operations.folders import FolderStore
from filegate.operations.storage import B2StorageService


def get_folder_store(request: Request) -> FolderStore:
  return request.app.state.folder_store


def get_storage_service(request: Request) -> B2StorageService:
  return request.app.state.storage


def get_notification_service(request: Request) -> NotificationService:
  return request.app.state.notifier
