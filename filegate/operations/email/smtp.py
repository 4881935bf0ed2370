"""SMTP adapter for sending notification emails from a mail account."""

import smtplib
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from typing import Any, Dict, List, Optional

from filegate.config import env
from filegate.logger import logger


class SMTPEmailTransport:
  """
  Send mail through an authenticated SMTP account.

  Defaults to implicit TLS on port 465 (the Gmail submission endpoint);
  with ``use_ssl=False`` the connection is upgraded with STARTTLS.
  """

  name = "smtp"

  def __init__(
    self,
    host: Optional[str] = None,
    port: Optional[int] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    use_ssl: Optional[bool] = None,
    from_address: Optional[str] = None,
    from_name: Optional[str] = None,
  ):
    self.host = host or env.SMTP_HOST
    self.port = port or env.SMTP_PORT
    self.username = username or env.EMAIL_USER
    self.password = password or env.EMAIL_PASS
    self.use_ssl = env.SMTP_USE_SSL if use_ssl is None else use_ssl
    self.from_address = from_address or env.EMAIL_FROM_ADDRESS or self.username
    self.from_name = from_name if from_name is not None else env.EMAIL_FROM_NAME

    if not self.username or not self.password:
      logger.warning("EMAIL_USER/EMAIL_PASS not configured - emails will not be sent")

  @property
  def sender(self) -> str:
    if self.from_name:
      return formataddr((self.from_name, self.from_address))
    return self.from_address

  def _connect(self) -> smtplib.SMTP:
    if self.use_ssl:
      return smtplib.SMTP_SSL(self.host, self.port)
    client = smtplib.SMTP(self.host, self.port)
    client.starttls()
    return client

  def send(
    self,
    to: List[str],
    subject: str,
    text: Optional[str] = None,
    html: Optional[str] = None,
  ) -> Dict[str, Any]:
    """
    Send one message to every address in ``to``.

    Returns:
        Delivery info with messageId, accepted and rejected recipients,
        the envelope and the server's final response line.
    """
    message = EmailMessage()
    message["From"] = self.sender
    message["To"] = ", ".join(to)
    message["Subject"] = subject
    message["Message-ID"] = make_msgid()

    if text:
      message.set_content(text)
      if html:
        message.add_alternative(html, subtype="html")
    else:
      message.set_content(html, subtype="html")

    with self._connect() as client:
      client.login(self.username, self.password)
      refused = client.send_message(message, from_addr=self.from_address, to_addrs=to)
      code, reply = client.noop()

    rejected = list(refused.keys())
    accepted = [address for address in to if address not in refused]

    return {
      "messageId": message["Message-ID"],
      "accepted": accepted,
      "rejected": rejected,
      "envelope": {"from": self.from_address, "to": to},
      "response": f"{code} {reply.decode(errors='replace')}",
    }
