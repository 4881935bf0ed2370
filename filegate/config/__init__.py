"""
Centralized configuration package for FileGate Service.

This package provides a single source of truth for all configuration settings,
including environment variables, fixed constants and startup validation.
"""

from .constants import (
  DOWNLOAD_URL_TTL_SECONDS,
  FILES_ROOT_PREFIX,
  LIST_FILES_MAX_COUNT,
)
from .env import EnvConfig, env
from .validation import ConfigValidationError, EnvValidator

__all__ = [
  "DOWNLOAD_URL_TTL_SECONDS",
  "FILES_ROOT_PREFIX",
  "LIST_FILES_MAX_COUNT",
  "ConfigValidationError",
  "EnvConfig",
  "EnvValidator",
  "env",
]
