"""Outgoing email: transports, templates and the notification service."""

from .service import NotificationService, create_transport, normalize_recipients
from .ses import SESEmailTransport
from .smtp import SMTPEmailTransport
from .templates import reminder_email

__all__ = [
  "NotificationService",
  "SESEmailTransport",
  "SMTPEmailTransport",
  "create_transport",
  "normalize_recipients",
  "reminder_email",
]
