"""Beat schedule for FileGate's periodic tasks."""

from typing import Any, Dict

from filegate.config import env


def build_beat_schedule(env_config=env) -> Dict[str, Dict[str, Any]]:
  """Periodic tasks enabled by the given configuration."""
  schedule: Dict[str, Dict[str, Any]] = {}

  # Opt-in; overlapping runs are not gated
  if env_config.REMINDERS_ENABLED:
    schedule["send-event-reminders"] = {
      "task": "filegate.tasks.reminders.send_event_reminders",
      "schedule": float(env_config.REMINDER_POLL_INTERVAL_SECONDS),
      "options": {"queue": env_config.QUEUE_DEFAULT},
    }

  return schedule


BEAT_SCHEDULE = build_beat_schedule()
