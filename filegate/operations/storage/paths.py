"""
Object key layout for user files.

Every object the gateway writes lives under ``archivos/{uid}/``, optionally
followed by a folder segment. The same prefix is the only ownership check for
reads and deletes.
"""

from typing import Optional

from filegate.config.constants import FILES_ROOT_PREFIX
from filegate.exceptions import AuthorizationError


def user_prefix(uid: str) -> str:
  """Prefix that every object owned by ``uid`` starts with."""
  return f"{FILES_ROOT_PREFIX}{uid}/"


def build_file_path(uid: str, filename: str, carpeta: Optional[str] = None) -> str:
  """
  Compose the object key for an uploaded file.

  Args:
      uid: Owner of the file
      filename: Original file name as sent by the client
      carpeta: Optional folder segment

  Returns:
      ``archivos/{uid}/[{carpeta}/]{filename}``
  """
  path = user_prefix(uid)
  if carpeta:
    path += f"{carpeta}/"
  return path + filename


def list_prefix(uid: Optional[str] = None) -> str:
  """Prefix used to list files, scoped to a user when ``uid`` is given."""
  if uid:
    return user_prefix(uid)
  return FILES_ROOT_PREFIX


def is_owned_by(file_name: str, uid: str) -> bool:
  """Return True when ``file_name`` sits inside the namespace of ``uid``."""
  return file_name.startswith(user_prefix(uid))


def require_owner(file_name: str, uid: str, action: str = "access") -> None:
  """
  Reject paths outside the caller's namespace.

  Raises:
      AuthorizationError: If ``file_name`` does not start with ``archivos/{uid}/``
  """
  if not is_owned_by(file_name, uid):
    raise AuthorizationError(
      f"Not authorized to {action} this file", uid=uid, path=file_name
    )
