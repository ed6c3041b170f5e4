"""Celery application configuration for GitScrum."""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("gitscrum")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
