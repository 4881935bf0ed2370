"""HTTP middleware for the FileGate API."""

from .logging import (
  SecurityLoggingMiddleware,
  StructuredLoggingMiddleware,
  get_safe_url_for_logging,
  redact_sensitive_query_params,
  request_uid,
)

__all__ = [
  "SecurityLoggingMiddleware",
  "StructuredLoggingMiddleware",
  "get_safe_url_for_logging",
  "redact_sensitive_query_params",
  "request_uid",
]
