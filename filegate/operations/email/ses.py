"""AWS SES adapter for sending notification emails."""

from typing import Any, Dict, List, Optional

import boto3

from filegate.config import env
from filegate.logger import logger


class SESEmailTransport:
  """Send mail via Amazon SES."""

  name = "ses"

  def __init__(
    self,
    from_address: Optional[str] = None,
    from_name: Optional[str] = None,
    region_name: Optional[str] = None,
    client: Any = None,
  ):
    self.ses_client = client or boto3.client(
      "ses", region_name=region_name or env.AWS_REGION
    )
    self.from_address = from_address or env.EMAIL_FROM_ADDRESS
    self.from_name = from_name if from_name is not None else env.EMAIL_FROM_NAME

    if not self.from_address:
      logger.warning("EMAIL_FROM_ADDRESS not configured - emails will not be sent")

  @property
  def sender(self) -> str:
    if self.from_name:
      return f"{self.from_name} <{self.from_address}>"
    return self.from_address

  def send(
    self,
    to: List[str],
    subject: str,
    text: Optional[str] = None,
    html: Optional[str] = None,
  ) -> Dict[str, Any]:
    body: Dict[str, Any] = {}
    if text:
      body["Text"] = {"Data": text, "Charset": "UTF-8"}
    if html:
      body["Html"] = {"Data": html, "Charset": "UTF-8"}

    response = self.ses_client.send_email(
      Source=self.sender,
      Destination={"ToAddresses": to},
      Message={
        "Subject": {"Data": subject, "Charset": "UTF-8"},
        "Body": body,
      },
      Tags=[{"Name": "Environment", "Value": env.ENVIRONMENT}],
    )

    # SES accepts or rejects the whole message
    return {
      "messageId": response["MessageId"],
      "accepted": list(to),
      "rejected": [],
      "envelope": {"from": self.from_address, "to": list(to)},
      "response": response.get("ResponseMetadata", {}).get("RequestId", ""),
    }
