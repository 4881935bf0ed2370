"""Notification email endpoint."""

from fastapi import APIRouter, Depends

from filegate.models.api.common import ErrorResponse
from filegate.models.api.notifications import NotificationRequest, NotificationResponse
from filegate.operations.email import NotificationService
from filegate.routers.dependencies import get_notification_service

router = APIRouter(tags=["Notifications"])


@router.post(
  "/send-notification",
  response_model=NotificationResponse,
  operation_id="sendNotification",
  summary="Send Notification",
  description="Send an email synchronously through the configured mail transport.",
  responses={
    400: {"description": "Missing to, subject or body", "model": ErrorResponse},
    500: {"description": "Mail transport failed", "model": ErrorResponse},
  },
)
def send_notification(
  request: NotificationRequest,
  notifier: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
  info = notifier.send(
    request.to, request.subject, text=request.text, html=request.html
  )
  return NotificationResponse(info=info)
