"""
Environment variable validation for startup checks.

This module provides validation functions to ensure all required
environment variables are properly configured at application startup.
"""

from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
  """Raised when configuration validation fails."""

  pass


class EnvValidator:
  """Validates environment configuration at startup."""

  STORAGE_VARS = {
    "B2_APPLICATION_KEY_ID": "Backblaze B2 application key id",
    "B2_APPLICATION_KEY": "Backblaze B2 application key",
    "B2_BUCKET_ID": "Backblaze B2 bucket id",
    "B2_BUCKET_NAME": "Backblaze B2 bucket name",
  }

  SMTP_VARS = {
    "EMAIL_USER": "Mail account user",
    "EMAIL_PASS": "Mail account password",
  }

  @staticmethod
  def validate_required_vars(env_config) -> None:
    """
    Validate that all required environment variables are set.

    Missing variables are errors in production and warnings elsewhere.

    Args:
        env_config: The EnvConfig instance to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    errors: List[str] = []
    warnings: List[str] = []
    strict = env_config.ENVIRONMENT == "prod"

    def missing(var_name: str, description: str) -> None:
      message = f"{var_name}: {description} is not set"
      (errors if strict else warnings).append(message)

    for var_name, description in EnvValidator.STORAGE_VARS.items():
      if not getattr(env_config, var_name, None):
        missing(var_name, description)

    transport = getattr(env_config, "EMAIL_TRANSPORT", "smtp")
    if transport == "smtp":
      for var_name, description in EnvValidator.SMTP_VARS.items():
        if not getattr(env_config, var_name, None):
          missing(var_name, description)
    elif transport == "ses":
      if not getattr(env_config, "EMAIL_FROM_ADDRESS", None):
        missing("EMAIL_FROM_ADDRESS", "SES sender address")

    if getattr(env_config, "REMINDERS_ENABLED", False) and not getattr(
      env_config, "FIREBASE_CREDENTIALS", None
    ):
      errors.append(
        "FIREBASE_CREDENTIALS: Firebase service account is required when REMINDERS_ENABLED is set"
      )

    errors.extend(env_config.validate())

    for warning in warnings:
      logger.warning(f"Configuration warning: {warning}")

    if errors:
      error_msg = "Configuration validation failed:\n" + "\n".join(
        f"  - {e}" for e in errors
      )
      raise ConfigValidationError(error_msg)

  @staticmethod
  def get_config_summary(env_config) -> Dict[str, Any]:
    """
    Get a summary of the current configuration (without secrets).

    Args:
        env_config: The EnvConfig instance

    Returns:
        Dictionary with configuration summary
    """
    return {
      "environment": env_config.ENVIRONMENT,
      "port": env_config.PORT,
      "cors_origins": env_config.get_cors_origins(),
      "bucket_name": env_config.B2_BUCKET_NAME or None,
      "storage_configured": bool(
        env_config.B2_APPLICATION_KEY_ID and env_config.B2_APPLICATION_KEY
      ),
      "email_transport": env_config.EMAIL_TRANSPORT,
      "reminders_enabled": env_config.REMINDERS_ENABLED,
      "expose_upstream_errors": env_config.EXPOSE_UPSTREAM_ERRORS,
    }
