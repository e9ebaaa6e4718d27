"""
Celery configuration for the Django application.

Celery runs the work that must not block a request:
- Push notifications for new chat messages (notifications.tasks)
- Periodic jobs scheduled through django-celery-beat

Redis is both the message broker and result backend. Tasks are
auto-discovered from the tasks.py module of every installed app.

Usage:
    from notifications.tasks import send_chat_push_notification

    send_chat_push_notification.delay(str(message.pk), recipient_ids)

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
