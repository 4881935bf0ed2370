"""Notification email models."""

from typing import Any

from pydantic import BaseModel, Field


class NotificationRequest(BaseModel):
  """Body of ``POST /send-notification``. At least one of text or html is required."""

  to: str | list[str] | None = Field(
    None,
    description="Recipient address, comma-separated addresses, or a list",
    examples=["someone@example.com"],
  )
  subject: str | None = Field(None, examples=["Your file is ready"])
  text: str | None = Field(None, description="Plain text body")
  html: str | None = Field(None, description="HTML body")


class NotificationResponse(BaseModel):
  success: bool = Field(True)
  message: str = Field("Email sent")
  info: dict[str, Any] = Field(
    ...,
    description="Transport delivery info: messageId, accepted, rejected, envelope, response",
  )
