"""
Periodic event reminders.

Runs as a Celery beat task when ``REMINDERS_ENABLED`` is set, or once from
the command line:

    python -m filegate.tasks.reminders --run-once
"""

import argparse
import json
import sys
from typing import Any, Dict, Optional

from filegate.celery import celery_app
from filegate.logger import worker_logger as logger
from filegate.operations.email import NotificationService
from filegate.operations.identity import FirebaseIdentityProvider, FirestoreEventSource
from filegate.operations.reminders import ReminderPoller


def build_poller(
  lookahead_minutes: Optional[int] = None, timezone_name: Optional[str] = None
) -> ReminderPoller:
  """Poller wired to Firestore, Firebase Auth and the configured mail transport."""
  return ReminderPoller(
    event_source=FirestoreEventSource(),
    identity=FirebaseIdentityProvider(),
    notifier=NotificationService(),
    lookahead_minutes=lookahead_minutes,
    timezone_name=timezone_name,
  )


@celery_app.task(bind=True)
def send_event_reminders(self) -> Dict[str, Any]:
  """Send reminders for events starting within the lookahead window."""
  logger.info("Starting event reminder scan")

  try:
    summary = build_poller().run_once()
  except Exception as exc:
    # No retry; the next tick scans again
    logger.error(f"Event reminder scan failed: {exc}", exc_info=True)
    raise

  return summary.to_dict()


def main(argv=None) -> int:
  parser = argparse.ArgumentParser(
    description="Event reminder poller",
    formatter_class=argparse.RawDescriptionHelpFormatter,
    epilog="""
Examples:
    # Scan once with the configured window
    %(prog)s --run-once

    # Scan once with a 30 minute window
    %(prog)s --run-once --lookahead 30
""",
  )
  parser.add_argument(
    "--run-once", action="store_true", help="Run a single scan and exit"
  )
  parser.add_argument(
    "--lookahead", type=int, help="Lookahead window in minutes (default: from env)"
  )
  parser.add_argument("--timezone", help="Timezone for event times (default: from env)")

  args = parser.parse_args(argv)

  if not args.run_once:
    parser.print_help()
    print(
      "\nScheduled runs are driven by Celery beat: "
      "celery -A filegate.celery beat / worker"
    )
    return 2

  summary = build_poller(args.lookahead, args.timezone).run_once()
  print(json.dumps(summary.to_dict(), indent=2))
  return 1 if summary.failed else 0


if __name__ == "__main__":
  sys.exit(main())
