"""Email bodies for event reminders."""

from datetime import datetime
from html import escape
from typing import Dict

from filegate.config.constants import EVENT_TIME_FORMAT


def reminder_email(title: str, starts_at: datetime) -> Dict[str, str]:
  """Subject, text and html for an upcoming event reminder."""
  title = title or "Untitled event"
  when = starts_at.strftime(f"%Y-%m-%d {EVENT_TIME_FORMAT}")
  safe_title = escape(title)

  return {
    "subject": f"Reminder: {title}",
    "text": f"""Your event "{title}" starts soon.

Starts at: {when} ({starts_at.tzname() or "UTC"})

This is an automated message, please do not reply to this email.""",
    "html": f"""
<!DOCTYPE html>
<html>
<head>
    <style>
        body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .footer {{ padding-top: 20px; color: #6c757d; font-size: 12px; }}
    </style>
</head>
<body>
    <div class="container">
        <h2>{safe_title}</h2>
        <p>Your event starts soon.</p>
        <p><strong>Starts at:</strong> {when} ({starts_at.tzname() or "UTC"})</p>
        <div class="footer">
            <p>This is an automated message, please do not reply to this email.</p>
        </div>
    </div>
</body>
</html>""",
  }
