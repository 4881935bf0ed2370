"""
Request logging middleware.

``StructuredLoggingMiddleware`` writes one line per request with timing, the
caller's uid (taken from the query string when present) and a request id
that is echoed back in ``X-Request-ID``.

``SecurityLoggingMiddleware`` records prefix-check rejections (403) and
requests whose ``fileName`` tries to climb out of a namespace.

Signed download URLs and B2 tokens travel in query strings, so a query
string is redacted before it is written anywhere.
"""

import time
import uuid
from typing import Callable, Optional
from urllib.parse import parse_qsl, urlencode

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from filegate.logger import log_api, log_app_error, log_auth_event, security_logger

REDACTED = "REDACTED"

SENSITIVE_QUERY_PARAMS = frozenset(
  {
    "authorization",
    "token",
    "access_token",
    "auth",
    "api_key",
    "apikey",
    "password",
    "pass",
    "secret",
  }
)

UNLOGGED_PATHS = ("/status", "/favicon.ico", "/docs", "/openapi.json")

MAX_PATH_LENGTH = 500


def redact_sensitive_query_params(query_string: str) -> str:
  """Replace the values of sensitive parameters with ``REDACTED``."""
  if not query_string:
    return ""

  try:
    pairs = parse_qsl(query_string, keep_blank_values=True, strict_parsing=True)
  except ValueError:
    return ""

  return urlencode(
    [(key, REDACTED if key.lower() in SENSITIVE_QUERY_PARAMS else value) for key, value in pairs]
  )


def get_safe_url_for_logging(request: Request) -> str:
  """Request path plus its redacted query string."""
  query = redact_sensitive_query_params(request.url.query)
  return f"{request.url.path}?{query}" if query else request.url.path


def request_uid(request: Request) -> Optional[str]:
  """Trimmed ``uid`` query parameter, or None."""
  uid = (request.query_params.get("uid") or "").strip()
  return uid or None


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
  def __init__(self, app, exclude_paths: Optional[tuple] = None):
    super().__init__(app)
    self.exclude_paths = exclude_paths or UNLOGGED_PATHS

  async def dispatch(self, request: Request, call_next: Callable) -> Response:
    if request.url.path.startswith(self.exclude_paths):
      return await call_next(request)

    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    uid = request_uid(request)
    started = time.perf_counter()

    try:
      response = await call_next(request)
    except Exception as e:
      log_app_error(
        error=e,
        component="api_middleware",
        action="request_processing",
        user_id=uid,
        metadata={
          "method": request.method,
          "path": request.url.path,
          "duration_ms": round((time.perf_counter() - started) * 1000, 2),
          "request_id": request_id,
        },
      )
      raise

    log_api(
      method=request.method,
      path=get_safe_url_for_logging(request),
      status_code=response.status_code,
      duration_ms=(time.perf_counter() - started) * 1000,
      user_id=uid,
      request_id=request_id,
    )
    response.headers["X-Request-ID"] = request_id
    return response


class SecurityLoggingMiddleware(BaseHTTPMiddleware):
  async def dispatch(self, request: Request, call_next: Callable) -> Response:
    client_ip = request.client.host if request.client else "unknown"
    file_name = request.query_params.get("fileName", "")

    reasons = []
    if len(request.url.path) > MAX_PATH_LENGTH:
      reasons.append("long_path")
    if "../" in request.url.path or "../" in file_name:
      reasons.append("path_traversal")

    if reasons:
      security_logger.warning(
        f"Suspicious request detected from {client_ip}",
        extra={
          "component": "security",
          "action": "suspicious_request",
          "ip_address": client_ip,
          "method": request.method,
          "path": get_safe_url_for_logging(request),
          "user_id": request_uid(request),
          "success": False,
          "metadata": {"reasons": reasons},
        },
      )

    response = await call_next(request)

    if response.status_code == 403:
      log_auth_event(
        event_type="file_access_denied",
        user_id=request_uid(request),
        ip_address=client_ip,
        success=False,
        metadata={
          "method": request.method,
          "path": request.url.path,
          "file_name": file_name,
        },
      )

    return response
