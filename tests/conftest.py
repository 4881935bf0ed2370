import os

# Configuration is read at import time; pin the test environment first
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from unittest.mock import Mock  # noqa: E402

from filegate.operations.email import NotificationService  # noqa: E402
from filegate.operations.folders import InMemoryFolderStore  # noqa: E402
from filegate.operations.storage import B2StorageService, UploadedFile  # noqa: E402
from main import create_app  # noqa: E402

TEST_UID = "u1"
OTHER_UID = "u2"


@pytest.fixture
def folder_store():
  """Fresh in-memory folder store."""
  return InMemoryFolderStore()


@pytest.fixture
def mock_storage():
  """Storage service double with canned B2 responses."""
  storage = Mock(spec=B2StorageService)
  storage.upload_file.return_value = UploadedFile(
    file_id="4_z123_f1", file_name="archivos/u1/report.pdf"
  )
  storage.list_files.return_value = [
    {"fileId": "4_z123_f1", "fileName": "archivos/u1/report.pdf", "size": 5}
  ]
  storage.delete_file.return_value = {
    "fileId": "4_z123_f1",
    "fileName": "archivos/u1/report.pdf",
  }
  storage.get_signed_url.return_value = (
    "https://f000.backblazeb2.com/file/bucket/archivos/u1/report.pdf?Authorization=tok"
  )
  return storage


@pytest.fixture
def mock_notifier():
  """Notification service double."""
  notifier = Mock(spec=NotificationService)
  notifier.send.return_value = {
    "messageId": "<abc@example.com>",
    "accepted": ["someone@example.com"],
    "rejected": [],
    "envelope": {"from": "noreply@example.com", "to": ["someone@example.com"]},
    "response": "250 2.0.0 OK",
  }
  return notifier


@pytest.fixture
def app(folder_store, mock_storage, mock_notifier):
  """Application wired to test doubles."""
  return create_app(
    folder_store=folder_store, storage=mock_storage, notifier=mock_notifier
  )


@pytest.fixture
def client(app):
  """Create a test client."""
  with TestClient(app, raise_server_exceptions=False) as test_client:
    yield test_client
