"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

import django

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
# Run Celery tasks inline; tests never talk to a broker
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "True")


def pytest_configure():
    """Configure Django settings before tests run."""
    django.setup()
