"""
Celery Configuration

Runs the scheduled payroll jobs (monthly salary generation) outside the
request cycle. Schedules live in settings.CELERY_BEAT_SCHEDULE.
"""

import os

# DJANGO_SETTINGS_MODULE must be set before Celery reads the Django config
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

from celery import Celery

app = Celery('core')

# namespace='CELERY' means all celery-related configuration keys
# should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Picks up PayrollSystem.tasks and any other app-level tasks modules
app.autodiscover_tasks()
