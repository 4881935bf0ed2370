"""Tests for environment configuration helpers."""

from unittest.mock import patch

from filegate.config.env import (
  EnvConfig,
  get_bool_env,
  get_int_env,
  get_list_env,
  get_str_env,
)


class TestEnvHelpers:
  """Test type-safe environment accessors."""

  def test_get_int_env(self, monkeypatch):
    monkeypatch.setenv("FILEGATE_TEST_INT", "42")
    assert get_int_env("FILEGATE_TEST_INT", 1) == 42

  def test_get_int_env_invalid_uses_default(self, monkeypatch):
    monkeypatch.setenv("FILEGATE_TEST_INT", "not-a-number")
    assert get_int_env("FILEGATE_TEST_INT", 7) == 7

  def test_get_int_env_missing_uses_default(self, monkeypatch):
    monkeypatch.delenv("FILEGATE_TEST_INT", raising=False)
    assert get_int_env("FILEGATE_TEST_INT", 3000) == 3000

  def test_get_bool_env(self, monkeypatch):
    for value in ("true", "1", "yes", "on", "TRUE"):
      monkeypatch.setenv("FILEGATE_TEST_BOOL", value)
      assert get_bool_env("FILEGATE_TEST_BOOL") is True

    monkeypatch.setenv("FILEGATE_TEST_BOOL", "false")
    assert get_bool_env("FILEGATE_TEST_BOOL", True) is False

  def test_get_bool_env_default(self, monkeypatch):
    monkeypatch.delenv("FILEGATE_TEST_BOOL", raising=False)
    assert get_bool_env("FILEGATE_TEST_BOOL", True) is True

  def test_get_str_env(self, monkeypatch):
    monkeypatch.setenv("FILEGATE_TEST_STR", "value")
    assert get_str_env("FILEGATE_TEST_STR") == "value"
    assert get_str_env("FILEGATE_TEST_MISSING_STR", "fallback") == "fallback"

  def test_get_list_env(self, monkeypatch):
    monkeypatch.setenv("FILEGATE_TEST_LIST", "http://a.test, http://b.test,,")
    assert get_list_env("FILEGATE_TEST_LIST") == ["http://a.test", "http://b.test"]

  def test_get_list_env_empty(self, monkeypatch):
    monkeypatch.delenv("FILEGATE_TEST_LIST", raising=False)
    assert get_list_env("FILEGATE_TEST_LIST") == []


class TestEnvConfig:
  """Test EnvConfig defaults and helpers."""

  def test_defaults(self):
    assert EnvConfig.B2_REALM == "production"
    assert EnvConfig.REMINDER_COLLECTION == "events"
    assert EnvConfig.QUEUE_DEFAULT == "default"

  def test_environment_checks(self):
    with patch.object(EnvConfig, "ENVIRONMENT", "prod"):
      assert EnvConfig.is_production()
      assert not EnvConfig.is_development()

    with patch.object(EnvConfig, "ENVIRONMENT", "local"):
      assert EnvConfig.is_development()

    with patch.object(EnvConfig, "ENVIRONMENT", "test"):
      assert EnvConfig.is_test()

  def test_validate_passes_with_defaults(self):
    with (
      patch.object(EnvConfig, "PORT", 3000),
      patch.object(EnvConfig, "REMINDER_LOOKAHEAD_MINUTES", 5),
      patch.object(EnvConfig, "REMINDER_POLL_INTERVAL_SECONDS", 60),
      patch.object(EnvConfig, "EMAIL_TRANSPORT", "smtp"),
    ):
      assert EnvConfig.validate() == []

  def test_validate_reports_each_problem(self):
    with (
      patch.object(EnvConfig, "PORT", 70000),
      patch.object(EnvConfig, "REMINDER_LOOKAHEAD_MINUTES", 0),
      patch.object(EnvConfig, "REMINDER_POLL_INTERVAL_SECONDS", 0),
      patch.object(EnvConfig, "EMAIL_TRANSPORT", "carrier-pigeon"),
    ):
      errors = EnvConfig.validate()

    assert len(errors) == 4
    assert any("PORT" in e for e in errors)
    assert any("EMAIL_TRANSPORT" in e for e in errors)

  def test_get_cors_origins_returns_copy(self):
    origins = EnvConfig.get_cors_origins()
    origins.append("http://evil.test")
    assert "http://evil.test" not in EnvConfig.get_cors_origins()

  def test_celery_config_uses_json(self):
    config = EnvConfig.get_celery_config()

    assert config["broker_url"] == EnvConfig.CELERY_BROKER_URL
    assert config["task_serializer"] == "json"
    assert config["accept_content"] == ["json"]
