"""Tests for the notification email service."""

import pytest
from unittest.mock import Mock, patch

from filegate.exceptions import ConfigurationError, MailDeliveryError, ValidationError
from filegate.operations.email.service import (
  NotificationService,
  create_transport,
  normalize_recipients,
)


@pytest.fixture
def mock_transport():
  transport = Mock()
  transport.send.return_value = {"messageId": "m-1", "accepted": ["a@example.com"]}
  return transport


class TestNormalizeRecipients:
  def test_single_address(self):
    assert normalize_recipients("a@example.com") == ["a@example.com"]

  def test_comma_separated(self):
    assert normalize_recipients("a@example.com, b@example.com") == [
      "a@example.com",
      "b@example.com",
    ]

  def test_list_with_blanks(self):
    assert normalize_recipients(["a@example.com", "", " b@example.com "]) == [
      "a@example.com",
      "b@example.com",
    ]

  def test_empty(self):
    assert normalize_recipients(None) == []
    assert normalize_recipients("") == []
    assert normalize_recipients([]) == []


class TestNotificationService:
  def test_send(self, mock_transport):
    service = NotificationService(transport=mock_transport)

    info = service.send("a@example.com", "Hello", text="Hi")

    assert info["messageId"] == "m-1"
    mock_transport.send.assert_called_once_with(
      ["a@example.com"], "Hello", text="Hi", html=None
    )

  def test_html_only_is_enough(self, mock_transport):
    NotificationService(transport=mock_transport).send(
      "a@example.com", "Hello", html="<p>Hi</p>"
    )

    mock_transport.send.assert_called_once()

  @pytest.mark.parametrize(
    "to,subject,text,html",
    [
      (None, "Hello", "Hi", None),
      ("a@example.com", None, "Hi", None),
      ("a@example.com", "", "Hi", None),
      ("a@example.com", "Hello", None, None),
      ("a@example.com", "Hello", "", ""),
      (" , ", "Hello", "Hi", None),
    ],
  )
  def test_missing_data_rejected(self, mock_transport, to, subject, text, html):
    with pytest.raises(ValidationError):
      NotificationService(transport=mock_transport).send(to, subject, text, html)

    mock_transport.send.assert_not_called()

  def test_transport_failure_wrapped(self, mock_transport):
    mock_transport.send.side_effect = OSError("Invalid login: 535-5.7.8")

    with pytest.raises(MailDeliveryError) as exc_info:
      NotificationService(transport=mock_transport).send("a@example.com", "Hi", "x")

    assert exc_info.value.message == "Invalid login: 535-5.7.8"
    assert exc_info.value.details["recipients"] == ["a@example.com"]
    assert isinstance(exc_info.value.__cause__, OSError)

  def test_transport_built_from_config_on_first_send(self, mock_transport):
    with patch(
      "filegate.operations.email.service.create_transport", return_value=mock_transport
    ) as factory:
      service = NotificationService()
      service.send("a@example.com", "Hello", text="Hi")
      service.send("a@example.com", "Hello", text="Hi")

    factory.assert_called_once_with()


class TestCreateTransport:
  def test_smtp(self):
    with patch("filegate.operations.email.service.SMTPEmailTransport") as smtp:
      assert create_transport("smtp") is smtp.return_value

  def test_ses(self):
    with patch("filegate.operations.email.service.SESEmailTransport") as ses:
      assert create_transport("SES") is ses.return_value

  def test_unknown(self):
    with pytest.raises(ConfigurationError, match="EMAIL_TRANSPORT"):
      create_transport("fax")
