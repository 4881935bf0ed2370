"""Tests for the request logging middleware."""

from unittest.mock import patch

from filegate.middleware.logging import redact_sensitive_query_params


class TestRedaction:
  def test_sensitive_params_redacted(self):
    result = redact_sensitive_query_params("fileName=a.txt&Authorization=tok&uid=u1")

    assert "tok" not in result
    assert "Authorization=REDACTED" in result
    assert "fileName=a.txt" in result
    assert "uid=u1" in result

  def test_empty_query(self):
    assert redact_sensitive_query_params("") == ""


class TestStructuredLoggingMiddleware:
  def test_request_id_header(self, client):
    response = client.get("/folders", params={"uid": "u1"})

    assert response.headers["X-Request-ID"]

  def test_request_is_logged_with_uid(self, client):
    with patch("filegate.middleware.logging.log_api") as mock_log_api:
      client.get("/folders", params={"uid": " u1 "})

    mock_log_api.assert_called_once()
    kwargs = mock_log_api.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["status_code"] == 200
    assert kwargs["user_id"] == "u1"
    assert kwargs["request_id"]

  def test_status_is_not_logged(self, client):
    with patch("filegate.middleware.logging.log_api") as mock_log_api:
      response = client.get("/status")

    assert "X-Request-ID" not in response.headers
    mock_log_api.assert_not_called()


class TestSecurityLoggingMiddleware:
  def test_traversal_in_file_name_flagged(self, client):
    with patch("filegate.middleware.logging.security_logger") as mock_logger:
      client.get("/download", params={"fileName": "archivos/u1/../u2/a.txt", "uid": "u1"})

    mock_logger.warning.assert_called_once()

  def test_successful_request_not_logged_as_security_event(self, client):
    with patch("filegate.middleware.logging.log_auth_event") as mock_log:
      client.get("/folders", params={"uid": "u1"})

    mock_log.assert_not_called()
