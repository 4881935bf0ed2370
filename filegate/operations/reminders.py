"""
Event reminder poller.

Each tick reads the full event collection, finds events starting within the
lookahead window and emails a reminder to each one's owner. Nothing records
which events were already notified, so an event can be reminded about on
consecutive ticks while it stays inside the window.
"""

from dataclasses import asdict, dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

from filegate.config import env
from filegate.config.constants import EVENT_TIME_FORMAT
from filegate.logger import log_app_error, worker_logger as logger
from filegate.operations.email import NotificationService, reminder_email
from filegate.operations.identity import EventSource, IdentityProvider


class InvalidEventError(ValueError):
  """Raised when an event's start date or time cannot be interpreted."""


@dataclass
class ReminderRunSummary:
  """Counters for a single poller tick."""

  scanned: int = 0
  due: int = 0
  sent: int = 0
  failed: int = 0
  skipped: int = 0

  def to_dict(self) -> Dict[str, int]:
    return asdict(self)


def parse_start_date(value: Any, tz: tzinfo) -> date:
  """
  Calendar date of an event's ``start`` field.

  Accepts ISO date or datetime strings, ``date`` and ``datetime`` values
  (Firestore timestamps arrive as aware datetimes). Aware values are
  converted to ``tz`` before the date is taken.
  """
  if isinstance(value, str):
    try:
      value = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError) as e:
      raise InvalidEventError(f"Invalid start date: {value!r}") from e

  if isinstance(value, datetime):
    if value.tzinfo is not None:
      value = value.astimezone(tz)
    return value.date()
  if isinstance(value, date):
    return value

  raise InvalidEventError(f"Invalid start date: {value!r}")


def parse_start_time(value: Any) -> time:
  """Parse an ``HH:MM`` time of day."""
  if not isinstance(value, str):
    raise InvalidEventError(f"Invalid start time: {value!r}")
  try:
    return datetime.strptime(value.strip(), EVENT_TIME_FORMAT).time()
  except ValueError as e:
    raise InvalidEventError(f"Invalid start time: {value!r}") from e


def event_datetime(event: Dict[str, Any], tz: tzinfo) -> datetime:
  """Combine ``start`` and ``time`` into an aware datetime in ``tz``."""
  start_date = parse_start_date(event.get("start"), tz)
  start_time = parse_start_time(event.get("time"))
  return datetime.combine(start_date, start_time, tzinfo=tz)


def is_due(starts_at: datetime, now: datetime, lookahead: timedelta) -> bool:
  """True when ``now <= starts_at <= now + lookahead``."""
  return now <= starts_at <= now + lookahead


class ReminderPoller:
  """Scan events and send reminders for those about to start."""

  def __init__(
    self,
    event_source: EventSource,
    identity: IdentityProvider,
    notifier: NotificationService,
    lookahead_minutes: Optional[int] = None,
    timezone_name: Optional[str] = None,
  ):
    self.event_source = event_source
    self.identity = identity
    self.notifier = notifier
    self.lookahead = timedelta(
      minutes=lookahead_minutes or env.REMINDER_LOOKAHEAD_MINUTES
    )
    self.tz = ZoneInfo(timezone_name or env.REMINDER_TIMEZONE)

  def resolve_recipient(self, event: Dict[str, Any]) -> Optional[str]:
    """Event's own email, else the email of its ``userId``."""
    email = event.get("email")
    if email:
      return email

    user_id = event.get("userId")
    if not user_id:
      return None
    return self.identity.get_user_email(user_id)

  def run_once(self, now: Optional[datetime] = None) -> ReminderRunSummary:
    """
    Run one tick.

    Failing to read the collection fails the tick. Failures on a single
    event are logged and counted; the remaining events are still processed.
    """
    now = now.astimezone(self.tz) if now else datetime.now(self.tz)
    summary = ReminderRunSummary()

    for event in self.event_source.fetch_events():
      summary.scanned += 1
      event_id = event.get("id")

      try:
        starts_at = event_datetime(event, self.tz)
      except InvalidEventError as e:
        summary.skipped += 1
        logger.warning(f"Skipping event {event_id}: {e}")
        continue

      if not is_due(starts_at, now, self.lookahead):
        continue
      summary.due += 1

      try:
        recipient = self.resolve_recipient(event)
        if not recipient:
          summary.skipped += 1
          logger.warning(f"Skipping event {event_id}: no email or resolvable userId")
          continue

        content = reminder_email(event.get("title", ""), starts_at)
        self.notifier.send(
          recipient, content["subject"], text=content["text"], html=content["html"]
        )
        summary.sent += 1
        logger.info(f"Sent reminder for event {event_id} to {recipient}")
      except Exception as e:
        summary.failed += 1
        log_app_error(
          e,
          component="reminders",
          action="send_reminder",
          error_category="upstream",
          user_id=event.get("userId"),
          metadata={"event_id": event_id},
        )

    logger.info(f"Reminder tick complete: {summary.to_dict()}")
    return summary
