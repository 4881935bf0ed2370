"""
FileGate Celery Tasks.

Task modules are registered through the ``include`` list of
``filegate.celery.celery_app``:

- reminders: periodic event reminder emails
"""
