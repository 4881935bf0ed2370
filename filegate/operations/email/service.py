"""
Notification email service.

Validates a send request, picks the configured transport and converts any
transport failure into a ``MailDeliveryError``.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from filegate.config import env
from filegate.exceptions import ConfigurationError, MailDeliveryError, ValidationError
from filegate.logger import logger

from .ses import SESEmailTransport
from .smtp import SMTPEmailTransport

Recipients = Union[str, Sequence[str]]


def normalize_recipients(to: Optional[Recipients]) -> List[str]:
  """
  Turn ``to`` into a list of addresses.

  Accepts a single address, a comma-separated string, or a list of either.
  Blank entries are dropped.
  """
  if not to:
    return []
  if isinstance(to, str):
    to = [to]

  addresses = []
  for entry in to:
    if not entry:
      continue
    addresses.extend(part.strip() for part in str(entry).split(",") if part.strip())
  return addresses


def create_transport(name: Optional[str] = None):
  """Build the mail transport named by ``EMAIL_TRANSPORT``."""
  name = (name or env.EMAIL_TRANSPORT).lower()
  if name == "smtp":
    return SMTPEmailTransport()
  if name == "ses":
    return SESEmailTransport()
  raise ConfigurationError("EMAIL_TRANSPORT", f"has unsupported value '{name}'")


class NotificationService:
  """Send notification emails through a single transport."""

  def __init__(self, transport=None):
    self._transport = transport

  @property
  def transport(self):
    # Built on first send
    if self._transport is None:
      self._transport = create_transport()
    return self._transport

  def send(
    self,
    to: Optional[Recipients],
    subject: Optional[str],
    text: Optional[str] = None,
    html: Optional[str] = None,
  ) -> Dict[str, Any]:
    """
    Send an email synchronously.

    Args:
        to: Recipient address(es)
        subject: Subject line
        text: Plain text body
        html: HTML body

    Returns:
        Delivery info reported by the transport

    Raises:
        ValidationError: If recipients, subject or both bodies are missing
        MailDeliveryError: If the transport fails
    """
    recipients = normalize_recipients(to)
    if not recipients or not subject or (not text and not html):
      raise ValidationError(
        "Missing data to send the email", fields=["to", "subject", "text|html"]
      )

    try:
      info = self.transport.send(recipients, subject, text=text, html=html)
    except MailDeliveryError:
      raise
    except Exception as e:
      logger.error(
        f"Failed to send email '{subject}' to {', '.join(recipients)}: {e}",
        extra={
          "component": "mail_transport",
          "action": "send",
          "error_category": "upstream",
        },
      )
      raise MailDeliveryError(str(e), operation="send", recipients=recipients) from e

    logger.info(
      f"Sent email '{subject}' to {', '.join(recipients)}. MessageId: {info.get('messageId')}"
    )
    return info
