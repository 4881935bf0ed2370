"""
Application loggers for FileGate.

Importing this module configures logging once. Code logs through one of four
named loggers:

- ``logger`` for operations (storage, email, folders)
- ``api_logger`` for the HTTP layer
- ``worker_logger`` for Celery tasks and the reminder poller
- ``security_logger`` for path authorization failures
"""

import logging
from typing import Any, Dict, Optional

from .config import env
from .config.logging import (
  get_logger,
  log_api_request,
  log_error,
  log_security_event,
  setup_logging,
)

setup_logging()

# SDK chatter that drowns out request logs while developing locally
NOISY_DEV_LOGGERS = ("urllib3", "requests", "google", "grpc", "b2sdk", "boto3", "botocore")

if env.is_development():
  for name in NOISY_DEV_LOGGERS:
    logging.getLogger(name).setLevel(logging.WARNING)

logger = get_logger("filegate")
api_logger = get_logger("filegate.api")
worker_logger = get_logger("filegate.workers")
security_logger = get_logger("filegate.security")


def log_api(
  method: str,
  path: str,
  status_code: int,
  duration_ms: float,
  user_id: Optional[str] = None,
  request_id: Optional[str] = None,
) -> None:
  log_api_request(
    api_logger, method, path, status_code, duration_ms, user_id, request_id
  )


def log_app_error(
  error: Exception,
  component: str,
  action: str,
  error_category: str = "application",
  user_id: Optional[str] = None,
  metadata: Optional[Dict[str, Any]] = None,
) -> None:
  log_error(logger, error, component, action, error_category, user_id, metadata)


def log_auth_event(
  event_type: str,
  user_id: Optional[str] = None,
  ip_address: Optional[str] = None,
  success: bool = True,
  metadata: Optional[Dict[str, Any]] = None,
) -> None:
  """Record an authorization decision on the security logger."""
  log_security_event(
    security_logger, event_type, user_id, ip_address, success, metadata
  )


__all__ = [
  "logger",
  "api_logger",
  "worker_logger",
  "security_logger",
  "log_api",
  "log_app_error",
  "log_auth_event",
  "get_logger",
]
