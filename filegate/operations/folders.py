"""
Folder registry.

Folders are a virtual namespace on top of the object store: a folder record
only remembers a name for a user, it does not create anything in the bucket.
Records live for the lifetime of the store instance; the application owns one
store and hands it to handlers through a dependency.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from filegate.exceptions import ValidationError
from filegate.logger import logger


@dataclass(frozen=True)
class Folder:
  """A named folder owned by a user."""

  id: int
  name: str
  uid: str

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


class FolderStore(ABC):
  """Storage interface for folder records."""

  @abstractmethod
  def create(self, name: Optional[str], uid: Optional[str]) -> Folder:
    """
    Create a folder for a user.

    Raises:
        ValidationError: If name or uid is missing or empty
    """

  @abstractmethod
  def list_by_owner(self, uid: Optional[str]) -> List[Folder]:
    """
    List the folders owned by a user in creation order.

    Raises:
        ValidationError: If uid is missing or empty
    """


class InMemoryFolderStore(FolderStore):
  """
  Process-local folder store.

  Ids start at 1 and increase monotonically. Duplicate names for the same
  user are allowed. Nothing survives a restart.
  """

  def __init__(self) -> None:
    self._folders: List[Folder] = []
    self._next_id = 1
    self._lock = threading.Lock()

  def create(self, name: Optional[str], uid: Optional[str]) -> Folder:
    if not name or not uid:
      raise ValidationError(
        "Folder name and uid are required", fields=["name", "uid"]
      )

    with self._lock:
      folder = Folder(id=self._next_id, name=name, uid=uid)
      self._next_id += 1
      self._folders.append(folder)

    logger.info(f"Created folder {folder.id} '{name}' for user {uid}")
    return folder

  def list_by_owner(self, uid: Optional[str]) -> List[Folder]:
    uid = uid.strip() if uid else ""
    if not uid:
      raise ValidationError("uid query parameter is required", fields=["uid"])

    return [folder for folder in self._folders if folder.uid == uid]

  def __len__(self) -> int:
    return len(self._folders)
