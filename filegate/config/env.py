"""
Environment variable configuration for FileGate.

All settings are read once, at import time, into class attributes of
``EnvConfig``. Tests patch the attributes on the ``env`` instance (or the
class) instead of the process environment.

Groups:
- server (environment, port, CORS, error exposure)
- object store (Backblaze B2)
- mail transport (SMTP account or Amazon SES)
- Firebase and the reminder poller
- Celery workers
"""

import os
from typing import List

from .constants import (
  DEFAULT_CORS_ORIGIN,
  DEFAULT_PORT,
  DEFAULT_REMINDER_LOOKAHEAD_MINUTES,
  DEFAULT_REMINDER_POLL_INTERVAL_SECONDS,
)

TRUTHY_VALUES = ("true", "1", "yes", "on")

EMAIL_TRANSPORTS = ("smtp", "ses")


def get_str_env(key: str, default: str = "") -> str:
  return os.getenv(key, default)


def get_int_env(key: str, default: int) -> int:
  """Integer setting; unparseable values fall back to ``default``."""
  raw = os.getenv(key)
  if raw is None:
    return default
  try:
    return int(raw)
  except ValueError:
    # The logger depends on this module, so warn on stdout
    print(f"Warning: {key}={raw!r} is not an integer, using {default}")
    return default


def get_bool_env(key: str, default: bool = False) -> bool:
  """Boolean setting; accepts true/1/yes/on in any case."""
  raw = os.getenv(key)
  if raw is None:
    return default
  return raw.strip().lower() in TRUTHY_VALUES


def get_list_env(key: str, default: str = "", separator: str = ",") -> List[str]:
  """Separated list setting with blank items dropped."""
  raw = os.getenv(key, default) or ""
  return [item.strip() for item in raw.split(separator) if item.strip()]


class EnvConfig:
  """Typed view of the process environment."""

  # --- Server ---------------------------------------------------------------

  ENVIRONMENT = get_str_env("ENVIRONMENT", "dev")
  DEBUG = get_bool_env("DEBUG", False)
  LOG_LEVEL = get_str_env("LOG_LEVEL", "INFO")

  HOST = get_str_env("HOST", "0.0.0.0")
  PORT = get_int_env("PORT", DEFAULT_PORT)

  # Browser origins allowed to call the gateway
  CORS_ALLOWED_ORIGINS = get_list_env("CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ORIGIN)

  # When false, 500 responses carry a generic message instead of the
  # upstream SDK's error text
  EXPOSE_UPSTREAM_ERRORS = get_bool_env("EXPOSE_UPSTREAM_ERRORS", True)

  # --- Object store (Backblaze B2) -------------------------------------------

  B2_APPLICATION_KEY_ID = get_str_env("B2_APPLICATION_KEY_ID")
  B2_APPLICATION_KEY = get_str_env("B2_APPLICATION_KEY")
  B2_BUCKET_ID = get_str_env("B2_BUCKET_ID")
  B2_BUCKET_NAME = get_str_env("B2_BUCKET_NAME")
  B2_REALM = get_str_env("B2_REALM", "production")

  # --- Mail transport ----------------------------------------------------------

  EMAIL_TRANSPORT = get_str_env("EMAIL_TRANSPORT", "smtp").lower()

  # SMTP account; also the default sender
  EMAIL_USER = get_str_env("EMAIL_USER")
  EMAIL_PASS = get_str_env("EMAIL_PASS")
  SMTP_HOST = get_str_env("SMTP_HOST", "smtp.gmail.com")
  SMTP_PORT = get_int_env("SMTP_PORT", 465)
  SMTP_USE_SSL = get_bool_env("SMTP_USE_SSL", True)

  EMAIL_FROM_ADDRESS = get_str_env("EMAIL_FROM_ADDRESS") or EMAIL_USER
  EMAIL_FROM_NAME = get_str_env("EMAIL_FROM_NAME")

  # SES
  AWS_REGION = get_str_env("AWS_REGION", "us-east-1")

  # --- Firebase and reminders ------------------------------------------------

  # Service account JSON, inline
  FIREBASE_CREDENTIALS = get_str_env("FIREBASE_CREDENTIALS")

  REMINDERS_ENABLED = get_bool_env("REMINDERS_ENABLED", False)
  REMINDER_COLLECTION = get_str_env("REMINDER_COLLECTION", "events")
  REMINDER_LOOKAHEAD_MINUTES = get_int_env(
    "REMINDER_LOOKAHEAD_MINUTES", DEFAULT_REMINDER_LOOKAHEAD_MINUTES
  )
  REMINDER_POLL_INTERVAL_SECONDS = get_int_env(
    "REMINDER_POLL_INTERVAL_SECONDS", DEFAULT_REMINDER_POLL_INTERVAL_SECONDS
  )
  REMINDER_TIMEZONE = get_str_env("REMINDER_TIMEZONE", "UTC")

  # --- Celery ----------------------------------------------------------------

  CELERY_BROKER_URL = get_str_env("CELERY_BROKER_URL", "redis://localhost:6379/0")
  CELERY_RESULT_BACKEND = get_str_env(
    "CELERY_RESULT_BACKEND", "redis://localhost:6379/1"
  )
  CELERY_TASK_TIME_LIMIT = get_int_env("CELERY_TASK_TIME_LIMIT", 300)
  CELERY_TASK_SOFT_TIME_LIMIT = get_int_env("CELERY_TASK_SOFT_TIME_LIMIT", 240)
  QUEUE_DEFAULT = get_str_env("QUEUE_DEFAULT", "default")

  # --- Helpers -----------------------------------------------------------------

  @classmethod
  def is_production(cls) -> bool:
    return cls.ENVIRONMENT.lower() in ("prod", "production")

  @classmethod
  def is_development(cls) -> bool:
    return cls.ENVIRONMENT.lower() in ("dev", "development", "local")

  @classmethod
  def is_test(cls) -> bool:
    return cls.ENVIRONMENT.lower() in ("test", "testing")

  @classmethod
  def validate(cls) -> List[str]:
    """Range and enum checks; returns one message per invalid setting."""
    errors = []

    if not 1 <= cls.PORT <= 65535:
      errors.append("PORT must be between 1 and 65535")
    if cls.REMINDER_LOOKAHEAD_MINUTES < 1:
      errors.append("REMINDER_LOOKAHEAD_MINUTES must be at least 1")
    if cls.REMINDER_POLL_INTERVAL_SECONDS < 1:
      errors.append("REMINDER_POLL_INTERVAL_SECONDS must be at least 1")
    if cls.EMAIL_TRANSPORT not in EMAIL_TRANSPORTS:
      errors.append(f"EMAIL_TRANSPORT must be one of {', '.join(EMAIL_TRANSPORTS)}")

    return errors

  @classmethod
  def get_cors_origins(cls) -> List[str]:
    return list(cls.CORS_ALLOWED_ORIGINS)

  @classmethod
  def get_celery_config(cls) -> dict:
    """Settings passed to the Celery app."""
    return {
      "broker_url": cls.CELERY_BROKER_URL,
      "result_backend": cls.CELERY_RESULT_BACKEND,
      "task_time_limit": cls.CELERY_TASK_TIME_LIMIT,
      "task_soft_time_limit": cls.CELERY_TASK_SOFT_TIME_LIMIT,
      "task_default_queue": cls.QUEUE_DEFAULT,
      "task_serializer": "json",
      "result_serializer": "json",
      "accept_content": ["json"],
      "timezone": "UTC",
      "enable_utc": True,
    }


env = EnvConfig()
