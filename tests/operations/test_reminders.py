"""Tests for the event reminder poller."""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from unittest.mock import Mock

from filegate.exceptions import IdentityLookupError, MailDeliveryError
from filegate.operations.reminders import (
  InvalidEventError,
  ReminderPoller,
  event_datetime,
  is_due,
  parse_start_date,
  parse_start_time,
)

UTC = ZoneInfo("UTC")
NOW = datetime(2026, 3, 1, 10, 0, tzinfo=UTC)


def make_event(minutes_from_now, **fields):
  starts_at = NOW + timedelta(minutes=minutes_from_now)
  event = {
    "id": f"evt-{minutes_from_now}",
    "title": "Team sync",
    "start": starts_at.date().isoformat(),
    "time": starts_at.strftime("%H:%M"),
  }
  event.update(fields)
  return event


@pytest.fixture
def event_source():
  return Mock()


@pytest.fixture
def identity():
  provider = Mock()
  provider.get_user_email.return_value = "owner@example.com"
  return provider


@pytest.fixture
def notifier():
  return Mock()


@pytest.fixture
def poller(event_source, identity, notifier):
  return ReminderPoller(
    event_source, identity, notifier, lookahead_minutes=5, timezone_name="UTC"
  )


class TestParsing:
  def test_iso_date_string(self):
    assert parse_start_date("2026-03-01", UTC) == date(2026, 3, 1)

  def test_iso_datetime_string(self):
    assert parse_start_date("2026-03-01T23:30:00", UTC) == date(2026, 3, 1)

  def test_aware_datetime_uses_local_calendar_date(self):
    value = datetime(2026, 3, 1, 2, 0, tzinfo=timezone.utc)

    assert parse_start_date(value, ZoneInfo("America/Bogota")) == date(2026, 2, 28)

  def test_date_value(self):
    assert parse_start_date(date(2026, 3, 1), UTC) == date(2026, 3, 1)

  @pytest.mark.parametrize("value", [None, 12345, "not a date", ""])
  def test_invalid_start(self, value):
    with pytest.raises(InvalidEventError):
      parse_start_date(value, UTC)

  def test_time(self):
    assert parse_start_time("09:05") == time(9, 5)

  @pytest.mark.parametrize("value", [None, "25:00", "9am", 900])
  def test_invalid_time(self, value):
    with pytest.raises(InvalidEventError):
      parse_start_time(value)

  def test_event_datetime(self):
    event = {"start": "2026-03-01", "time": "10:03"}

    assert event_datetime(event, UTC) == datetime(2026, 3, 1, 10, 3, tzinfo=UTC)


class TestWindow:
  def test_bounds_are_inclusive(self):
    lookahead = timedelta(minutes=5)

    assert is_due(NOW, NOW, lookahead)
    assert is_due(NOW + lookahead, NOW, lookahead)
    assert not is_due(NOW - timedelta(seconds=1), NOW, lookahead)
    assert not is_due(NOW + lookahead + timedelta(seconds=1), NOW, lookahead)


class TestRunOnce:
  def test_resolves_user_id_and_sends_one_email(
    self, poller, event_source, identity, notifier
  ):
    event_source.fetch_events.return_value = [make_event(3, userId="user-1")]

    summary = poller.run_once(now=NOW)

    identity.get_user_email.assert_called_once_with("user-1")
    notifier.send.assert_called_once()
    args, kwargs = notifier.send.call_args
    assert args[0] == "owner@example.com"
    assert args[1] == "Reminder: Team sync"
    assert kwargs["text"] and kwargs["html"]
    assert summary.to_dict() == {
      "scanned": 1,
      "due": 1,
      "sent": 1,
      "failed": 0,
      "skipped": 0,
    }

  def test_direct_email_skips_lookup(self, poller, event_source, identity, notifier):
    event_source.fetch_events.return_value = [
      make_event(1, email="direct@example.com", userId="user-1")
    ]

    poller.run_once(now=NOW)

    identity.get_user_email.assert_not_called()
    assert notifier.send.call_args[0][0] == "direct@example.com"

  def test_events_outside_window_ignored(self, poller, event_source, notifier):
    event_source.fetch_events.return_value = [
      make_event(-1, email="a@example.com"),
      make_event(6, email="a@example.com"),
      make_event(60 * 24, email="a@example.com"),
    ]

    summary = poller.run_once(now=NOW)

    notifier.send.assert_not_called()
    assert summary.scanned == 3
    assert summary.due == 0

  def test_unparseable_event_skipped(self, poller, event_source, notifier):
    event_source.fetch_events.return_value = [
      {"id": "bad", "title": "Broken", "start": "soon", "time": "10:01"},
      make_event(2, email="a@example.com"),
    ]

    summary = poller.run_once(now=NOW)

    assert summary.skipped == 1
    assert summary.sent == 1

  def test_event_without_recipient_skipped(self, poller, event_source, notifier):
    event_source.fetch_events.return_value = [make_event(2)]

    summary = poller.run_once(now=NOW)

    notifier.send.assert_not_called()
    assert summary.due == 1
    assert summary.skipped == 1

  def test_user_without_email_skipped(self, poller, event_source, identity, notifier):
    identity.get_user_email.return_value = None
    event_source.fetch_events.return_value = [make_event(2, userId="user-1")]

    summary = poller.run_once(now=NOW)

    notifier.send.assert_not_called()
    assert summary.skipped == 1

  def test_failures_do_not_stop_the_tick(
    self, poller, event_source, identity, notifier
  ):
    identity.get_user_email.side_effect = [
      IdentityLookupError("No user record found"),
      "second@example.com",
    ]
    notifier.send.side_effect = [MailDeliveryError("smtp down"), None, None]
    event_source.fetch_events.return_value = [
      make_event(1, userId="missing"),
      make_event(2, email="first@example.com"),
      make_event(3, userId="user-2"),
      make_event(4, email="third@example.com"),
    ]

    summary = poller.run_once(now=NOW)

    assert summary.failed == 2
    assert summary.sent == 2
    assert [c[0][0] for c in notifier.send.call_args_list] == [
      "first@example.com",
      "second@example.com",
      "third@example.com",
    ]

  def test_consecutive_ticks_notify_again(self, poller, event_source, notifier):
    event_source.fetch_events.return_value = [make_event(4, email="a@example.com")]

    poller.run_once(now=NOW)
    poller.run_once(now=NOW + timedelta(minutes=1))

    assert notifier.send.call_count == 2

  def test_collection_failure_fails_the_tick(self, poller, event_source):
    event_source.fetch_events.side_effect = IdentityLookupError("unavailable")

    with pytest.raises(IdentityLookupError):
      poller.run_once(now=NOW)

  def test_event_times_use_configured_timezone(self, event_source, identity, notifier):
    bogota = ZoneInfo("America/Bogota")
    poller = ReminderPoller(
      event_source, identity, notifier, lookahead_minutes=5, timezone_name="America/Bogota"
    )
    local_now = NOW.astimezone(bogota)
    starts_at = local_now + timedelta(minutes=2)
    event_source.fetch_events.return_value = [
      {
        "id": "evt",
        "title": "Local",
        "start": starts_at.date().isoformat(),
        "time": starts_at.strftime("%H:%M"),
        "email": "a@example.com",
      }
    ]

    summary = poller.run_once(now=NOW)

    assert summary.sent == 1
