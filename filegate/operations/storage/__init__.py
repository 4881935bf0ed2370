"""Object store access for user files."""

from filegate.operations.storage.b2 import B2StorageService, UploadedFile
from filegate.operations.storage.paths import (
  build_file_path,
  is_owned_by,
  list_prefix,
  require_owner,
  user_prefix,
)

__all__ = [
  "B2StorageService",
  "UploadedFile",
  "build_file_path",
  "is_owned_by",
  "list_prefix",
  "require_owner",
  "user_prefix",
]
