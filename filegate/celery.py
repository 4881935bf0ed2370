"""
Celery application for FileGate background work.

The only periodic job is the event-reminder poller; beat registers it when
``REMINDERS_ENABLED`` is set. Run with::

    celery -A filegate.celery worker -B
"""

from celery import Celery
from celery.signals import worker_ready
from kombu import Exchange, Queue

from filegate.config import env
from filegate.config.validation import EnvValidator
from filegate.logger import worker_logger

settings = env.get_celery_config()
default_queue = settings["task_default_queue"]

celery_app = Celery("filegate", include=["filegate.tasks.reminders"])

celery_app.conf.update(
  **settings,
  broker_connection_retry_on_startup=True,
  broker_transport_options={"visibility_timeout": 3600},
  task_acks_late=True,
  task_reject_on_worker_lost=True,
  worker_prefetch_multiplier=1,
  task_queues=[Queue(default_queue, Exchange(default_queue), routing_key=default_queue)],
)

from filegate.tasks.schedule import BEAT_SCHEDULE  # noqa: E402

celery_app.conf.beat_schedule = BEAT_SCHEDULE


@worker_ready.connect
def check_worker_environment(sender=None, **kwargs):
  """Fail fast in production when required settings are missing."""
  try:
    EnvValidator.validate_required_vars(env)
  except Exception as e:
    worker_logger.error(f"Worker configuration invalid: {e}")
    if env.is_production():
      raise
    return

  worker_logger.info(
    "Worker ready",
    extra={
      "component": "worker",
      "action": "startup",
      "metadata": EnvValidator.get_config_summary(env),
    },
  )
