"""
Firebase access for the reminder poller.

Two read-only collaborators share one Firebase app built from the
``FIREBASE_CREDENTIALS`` service account JSON:

- ``FirebaseIdentityProvider`` resolves a user id to an email address
- ``FirestoreEventSource`` reads the event collection
"""

import json
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import auth, credentials, firestore

from filegate.config import env
from filegate.exceptions import ConfigurationError, IdentityLookupError
from filegate.logger import logger

FIREBASE_APP_NAME = "filegate"

_app_lock = threading.Lock()


def get_firebase_app(credentials_json: Optional[str] = None) -> firebase_admin.App:
  """
  Return the shared Firebase app, initializing it on first use.

  Raises:
      ConfigurationError: If no service account is configured or it is not JSON
  """
  with _app_lock:
    try:
      return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
      pass

    raw = credentials_json or env.FIREBASE_CREDENTIALS
    if not raw:
      raise ConfigurationError("FIREBASE_CREDENTIALS")
    try:
      service_account = json.loads(raw)
    except json.JSONDecodeError as e:
      raise ConfigurationError("FIREBASE_CREDENTIALS", "is not valid JSON") from e

    app = firebase_admin.initialize_app(
      credentials.Certificate(service_account), name=FIREBASE_APP_NAME
    )
    logger.info(
      f"Initialized Firebase app for project {service_account.get('project_id', 'unknown')}"
    )
    return app


class IdentityProvider(ABC):
  """Resolves user ids to contact addresses."""

  @abstractmethod
  def get_user_email(self, user_id: str) -> Optional[str]:
    """Return the email of ``user_id``, or None when the user has none."""


class EventSource(ABC):
  """Source of calendar events to remind about."""

  @abstractmethod
  def fetch_events(self) -> List[Dict[str, Any]]:
    """Return every event document as a dict with its ``id``."""


class FirebaseIdentityProvider(IdentityProvider):
  """Look users up in Firebase Authentication."""

  def __init__(self, app: Optional[firebase_admin.App] = None):
    self._app = app

  @property
  def app(self) -> firebase_admin.App:
    if self._app is None:
      self._app = get_firebase_app()
    return self._app

  def get_user_email(self, user_id: str) -> Optional[str]:
    try:
      user = auth.get_user(user_id, app=self.app)
    except Exception as e:
      raise IdentityLookupError(str(e), operation="get_user", user_id=user_id) from e
    return user.email


class FirestoreEventSource(EventSource):
  """
  Read events from a Firestore collection.

  The whole collection is streamed on every call.
  """

  def __init__(
    self,
    collection: Optional[str] = None,
    app: Optional[firebase_admin.App] = None,
  ):
    self.collection = collection or env.REMINDER_COLLECTION
    self._app = app

  def fetch_events(self) -> List[Dict[str, Any]]:
    try:
      client = firestore.client(app=self._app or get_firebase_app())
      snapshots = client.collection(self.collection).stream()
      events = [{"id": snapshot.id, **(snapshot.to_dict() or {})} for snapshot in snapshots]
    except Exception as e:
      raise IdentityLookupError(
        str(e), operation="stream", collection=self.collection
      ) from e

    logger.debug(f"Fetched {len(events)} events from {self.collection}")
    return events
