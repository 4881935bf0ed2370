"""
Logging configuration for FileGate.

Development gets a plain one-line console format. Every other environment
emits one JSON object per line, split by severity:

- errors go to stderr
- info and warnings go to stdout
- debug lines (staging only) go to stdout through their own handler

Records may carry gateway context through ``extra``: ``component``,
``action``, ``user_id`` (the caller's uid), ``request_id``, ``file_name``,
``operation``, ``status_code``, ``duration_ms``, ``error_category`` and
``metadata``.
"""

import json
import logging
import logging.config
import traceback
from datetime import datetime, timezone
from typing import Any

from filegate.config.env import EnvConfig

APP_LOGGERS = [
  "filegate",
  "filegate.api",
  "filegate.workers",
  "filegate.security",
]

# Third-party loggers and the handler tier their output is routed to
LIBRARY_LOGGERS = {
  "uvicorn": "operational",
  "celery": "operational",
  "b2sdk": "critical",
  "boto3": "critical",
  "botocore": "critical",
  "firebase_admin": "critical",
}

# Context attributes copied from a record into the JSON line, in order
CONTEXT_FIELDS = (
  "action",
  "user_id",
  "request_id",
  "operation",
  "file_name",
  "method",
  "path",
  "status_code",
  "duration_ms",
  "ip_address",
  "success",
)

LEVELS_BY_ENVIRONMENT = {
  "prod": "INFO",
  "staging": "DEBUG",
  "test": "WARNING",
}


class StructuredFormatter(logging.Formatter):
  """Render a record as a single JSON line."""

  def format(self, record: logging.LogRecord) -> str:
    created = datetime.fromtimestamp(record.created, tz=timezone.utc)
    entry: dict[str, Any] = {
      "timestamp": created.isoformat().replace("+00:00", "Z"),
      "level": record.levelname,
      "logger": record.name,
      "component": getattr(record, "component", record.name),
      "message": record.getMessage(),
    }

    for field in CONTEXT_FIELDS:
      value = getattr(record, field, None)
      if value is not None:
        entry[field] = value

    if record.levelno >= logging.ERROR:
      category = getattr(record, "error_category", None)
      if category:
        entry["error_category"] = category
      if record.exc_info and record.exc_info[0] is not None:
        entry["error"] = {
          "type": record.exc_info[0].__name__,
          "message": str(record.exc_info[1]),
          "traceback": traceback.format_exception(*record.exc_info),
        }

    metadata = getattr(record, "metadata", None)
    if metadata:
      entry["metadata"] = metadata

    return json.dumps(entry, default=str, separators=(",", ":"))


class TieredLogFilter:
  """
  Pass only records belonging to one severity tier.

  ``critical`` is ERROR and above, ``operational`` is INFO and WARNING,
  ``debug`` is DEBUG. Unknown tiers pass everything.
  """

  BOUNDS = {
    "critical": (logging.ERROR, None),
    "operational": (logging.INFO, logging.ERROR),
    "debug": (logging.DEBUG, logging.INFO),
  }

  def __init__(self, tier: str):
    self.tier = tier

  def filter(self, record: logging.LogRecord) -> bool:
    if self.tier not in self.BOUNDS:
      return True
    low, high = self.BOUNDS[self.tier]
    return record.levelno >= low and (high is None or record.levelno < high)


def _stream_handler(level: str, stream: str, formatter: str, tier: str | None = None):
  handler: dict[str, Any] = {
    "class": "logging.StreamHandler",
    "level": level,
    "formatter": formatter,
    "stream": f"ext://sys.{stream}",
  }
  if tier:
    handler["filters"] = [f"{tier}_filter"]
  return handler


def get_logging_config(environment: str | None = None) -> dict[str, Any]:
  """
  Build the ``dictConfig`` for an environment.

  - prod: INFO, JSON, no debug handler
  - staging: DEBUG, JSON, with a separate debug handler
  - test: WARNING, JSON
  - dev (and anything else): ``LOG_LEVEL``, plain console output
  """
  env = environment or EnvConfig.ENVIRONMENT
  is_dev = env not in LEVELS_BY_ENVIRONMENT

  if is_dev:
    level = (EnvConfig.LOG_LEVEL or "DEBUG").upper()
  else:
    level = LEVELS_BY_ENVIRONMENT[env]
  with_debug = env == "staging"

  handlers = {
    "critical": _stream_handler("ERROR", "stderr", "structured", "critical"),
    "operational": _stream_handler("INFO", "stdout", "structured", "operational"),
    "console": _stream_handler(level, "stdout", "simple" if is_dev else "structured"),
  }
  app_handlers = ["console"] if is_dev else ["critical", "operational"]
  if with_debug:
    handlers["debug"] = _stream_handler("DEBUG", "stdout", "structured", "debug")
    app_handlers.append("debug")

  loggers: dict[str, Any] = {
    name: {"level": level, "handlers": list(app_handlers), "propagate": False}
    for name in APP_LOGGERS
  }
  for name, tier in LIBRARY_LOGGERS.items():
    loggers[name] = {
      "level": "WARNING",
      "handlers": ["console"] if is_dev else [tier],
      "propagate": False,
    }

  return {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
      "structured": {"()": StructuredFormatter},
      "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
    },
    "filters": {
      f"{tier}_filter": {"()": TieredLogFilter, "tier": tier}
      for tier in TieredLogFilter.BOUNDS
    },
    "handlers": handlers,
    "loggers": loggers,
    "root": {
      "level": "WARNING",
      "handlers": ["console"] if is_dev else ["critical"],
    },
  }


def setup_logging(environment: str | None = None) -> None:
  logging.config.dictConfig(get_logging_config(environment))


def get_logger(name: str) -> logging.Logger:
  return logging.getLogger(name)


def log_api_request(
  logger: logging.Logger,
  method: str,
  path: str,
  status_code: int,
  duration_ms: float,
  user_id: str | None = None,
  request_id: str | None = None,
) -> None:
  """One line per completed request; 5xx at ERROR, 4xx at WARNING."""
  if status_code >= 500:
    level = logging.ERROR
  elif status_code >= 400:
    level = logging.WARNING
  else:
    level = logging.INFO

  logger.log(
    level,
    f"{method} {path} - {status_code} ({duration_ms:.2f}ms)",
    extra={
      "component": "api",
      "action": "request_completed",
      "method": method,
      "path": path,
      "status_code": status_code,
      "duration_ms": round(duration_ms, 2),
      "user_id": user_id,
      "request_id": request_id,
    },
  )


def log_error(
  logger: logging.Logger,
  error: Exception,
  component: str,
  action: str,
  error_category: str = "application",
  user_id: str | None = None,
  metadata: dict[str, Any] | None = None,
) -> None:
  """Log an exception with its traceback and gateway context."""
  logger.error(
    f"Error in {component}.{action}: {error!s}",
    exc_info=error,
    extra={
      "component": component,
      "action": action,
      "error_category": error_category,
      "user_id": user_id,
      "metadata": metadata or {},
    },
  )


def log_security_event(
  logger: logging.Logger,
  event_type: str,
  user_id: str | None = None,
  ip_address: str | None = None,
  success: bool = True,
  metadata: dict[str, Any] | None = None,
) -> None:
  """Failed events are logged at WARNING, successful ones at INFO."""
  logger.log(
    logging.INFO if success else logging.WARNING,
    f"Security event: {event_type} - {'Success' if success else 'Failed'}",
    extra={
      "component": "security",
      "action": event_type,
      "user_id": user_id,
      "ip_address": ip_address,
      "success": success,
      "metadata": metadata or {},
    },
  )

