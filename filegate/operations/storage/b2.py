"""
Backblaze B2 adapter for user file storage.

Every public method authorizes the account again before talking to the
bucket; authorization tokens are never reused across calls. Any failure from
the SDK (network, auth, bad request, missing configuration) is raised as a
``StorageError`` carrying the original message.
"""

import hashlib
import io
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

from b2sdk.v2 import B2Api, InMemoryAccountInfo

from filegate.config import env
from filegate.config.constants import (
  B2_AUTO_CONTENT_TYPE,
  DOWNLOAD_URL_TTL_SECONDS,
  LIST_FILES_MAX_COUNT,
)
from filegate.exceptions import ConfigurationError, StorageError
from filegate.logger import logger
from filegate.operations.storage.paths import build_file_path, list_prefix


@dataclass(frozen=True)
class UploadedFile:
  """Identity of an object written to the bucket."""

  file_id: str
  file_name: str


def _default_api_factory() -> B2Api:
  return B2Api(InMemoryAccountInfo())


class B2StorageService:
  """
  File operations against a single B2 bucket.

  Credentials and bucket coordinates default to the environment but can be
  passed explicitly (tests, scripts).
  """

  def __init__(
    self,
    application_key_id: Optional[str] = None,
    application_key: Optional[str] = None,
    bucket_id: Optional[str] = None,
    bucket_name: Optional[str] = None,
    realm: Optional[str] = None,
    api_factory: Optional[Callable[[], B2Api]] = None,
  ):
    self.application_key_id = application_key_id or env.B2_APPLICATION_KEY_ID
    self.application_key = application_key or env.B2_APPLICATION_KEY
    self.bucket_id = bucket_id or env.B2_BUCKET_ID
    self.bucket_name = bucket_name or env.B2_BUCKET_NAME
    self.realm = realm or env.B2_REALM
    self._api_factory = api_factory or _default_api_factory

    if not (self.application_key_id and self.application_key):
      logger.warning("B2 credentials not configured - storage calls will fail")

  @contextmanager
  def _upstream(self, operation: str, **context: Any) -> Iterator[None]:
    try:
      yield
    except StorageError:
      raise
    except Exception as e:
      logger.error(
        f"B2 {operation} failed: {e}",
        extra={
          "component": "object_store",
          "action": operation,
          "error_category": "upstream",
          "metadata": context,
        },
      )
      raise StorageError(str(e), operation=operation, **context) from e

  def _authorize(self) -> B2Api:
    """Create a fresh API object and authorize the account on it."""
    if not self.application_key_id or not self.application_key:
      raise ConfigurationError("B2_APPLICATION_KEY_ID/B2_APPLICATION_KEY")
    if not self.bucket_id:
      raise ConfigurationError("B2_BUCKET_ID")

    api = self._api_factory()
    api.authorize_account(
      realm=self.realm,
      application_key_id=self.application_key_id,
      application_key=self.application_key,
    )
    logger.debug(f"Authorized B2 account for bucket {self.bucket_id}")
    return api

  def upload_file(
    self,
    uid: str,
    filename: str,
    data: bytes,
    carpeta: Optional[str] = None,
    content_type: Optional[str] = None,
  ) -> UploadedFile:
    """
    Upload bytes under the caller's namespace.

    A new upload URL and upload token are requested for every call.

    Args:
        uid: Owner of the file
        filename: Original file name
        data: Full file content
        carpeta: Optional folder segment
        content_type: MIME type; B2 infers it from the name when omitted

    Returns:
        UploadedFile with the B2 file id and the namespaced path
    """
    file_name = build_file_path(uid, filename, carpeta)

    with self._upstream("upload_file", file_name=file_name):
      api = self._authorize()
      upload = api.session.get_upload_url(self.bucket_id)
      response = api.raw_api.upload_file(
        upload["uploadUrl"],
        upload["authorizationToken"],
        file_name,
        len(data),
        content_type or B2_AUTO_CONTENT_TYPE,
        hashlib.sha1(data).hexdigest(),
        {},
        io.BytesIO(data),
      )

    logger.info(f"Uploaded {len(data)} bytes to {file_name}")
    return UploadedFile(file_id=response["fileId"], file_name=file_name)

  def list_files(self, uid: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    List up to ``LIST_FILES_MAX_COUNT`` files under ``archivos/[{uid}/]``.

    Without a uid the listing spans every user.
    """
    prefix = list_prefix(uid)

    with self._upstream("list_file_names", prefix=prefix):
      api = self._authorize()
      response = api.session.list_file_names(
        self.bucket_id,
        max_file_count=LIST_FILES_MAX_COUNT,
        prefix=prefix,
      )

    files = response.get("files", [])
    logger.debug(f"Listed {len(files)} files under {prefix}")
    return files

  def delete_file(self, file_id: str, file_name: str) -> Dict[str, Any]:
    """Delete one specific version of a file and return the B2 response."""
    with self._upstream("delete_file_version", file_id=file_id, file_name=file_name):
      api = self._authorize()
      response = api.session.delete_file_version(file_id, file_name)

    logger.info(f"Deleted file version {file_id} ({file_name})")
    return response

  def get_signed_url(
    self, file_name: str, valid_duration_in_seconds: int = DOWNLOAD_URL_TTL_SECONDS
  ) -> str:
    """
    Build a time-limited download URL for a file.

    The download authorization is scoped to ``file_name`` used as a prefix.

    Returns:
        ``{downloadUrl}/file/{bucketName}/{fileName}?Authorization={token}``
    """
    with self._upstream("get_download_authorization", file_name=file_name):
      if not self.bucket_name:
        raise ConfigurationError("B2_BUCKET_NAME")

      api = self._authorize()
      authorization = api.session.get_download_authorization(
        self.bucket_id, file_name, valid_duration_in_seconds
      )
      download_url = api.account_info.get_download_url()

    token = authorization["authorizationToken"]
    logger.debug(
      f"Issued download authorization for {file_name} ({valid_duration_in_seconds}s)"
    )
    return f"{download_url}/file/{self.bucket_name}/{file_name}?Authorization={token}"
