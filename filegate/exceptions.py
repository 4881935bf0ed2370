"""
Typed errors raised by FileGate operations.

Operations raise these instead of HTTP exceptions; the handlers in ``main``
read ``status_code`` and write the ``{"success": false, "error": ...}``
envelope. Upstream call sites chain the SDK exception as ``__cause__`` and
keep its message.
"""

from typing import Any, Dict, List, Optional


class FileGateError(Exception):
  """Base class. ``details`` is logged, never returned to the caller."""

  status_code = 500
  default_code: Optional[str] = None

  def __init__(
    self,
    message: str,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
  ):
    super().__init__(message)
    self.message = message
    self.error_code = error_code or self.default_code or type(self).__name__
    self.details = details or {}


class ValidationError(FileGateError):
  """A required request field is missing or blank."""

  status_code = 400
  default_code = "VALIDATION_ERROR"

  def __init__(self, message: str, fields: Optional[List[str]] = None):
    super().__init__(message, details={"fields": fields or []})


class AuthorizationError(FileGateError):
  """A file key lies outside the caller's ``archivos/{uid}/`` namespace."""

  status_code = 403
  default_code = "AUTHORIZATION_ERROR"

  def __init__(self, message: str, uid: Optional[str] = None, path: Optional[str] = None):
    context = {"uid": uid, "path": path}
    super().__init__(
      message, details={key: value for key, value in context.items() if value is not None}
    )


class UpstreamError(FileGateError):
  """An external collaborator call failed."""

  default_code = "UPSTREAM_ERROR"
  service = "upstream"

  def __init__(self, message: str, operation: Optional[str] = None, **context):
    details: Dict[str, Any] = {"service": self.service}
    if operation:
      details["operation"] = operation
    details.update(context)
    super().__init__(message, details=details)


class StorageError(UpstreamError):
  service = "object_store"


class MailDeliveryError(UpstreamError):
  service = "mail_transport"


class IdentityLookupError(UpstreamError):
  """Firebase Auth or Firestore could not be read."""

  service = "identity_provider"


class ConfigurationError(FileGateError):
  """A client was built without a setting it needs."""

  default_code = "CONFIGURATION_ERROR"

  def __init__(self, setting: str, reason: str = "is not configured"):
    super().__init__(f"{setting} {reason}", details={"setting": setting})
