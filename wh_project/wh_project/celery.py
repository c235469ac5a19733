""" Run workers with "celery -A wh_project worker -l info".
    Balance reconciliation jobs live in warehouse_core/tasks.py """
from __future__ import annotations
import os
from celery import Celery

# ensure Django settings are set for Celery
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "wh_project.settings")

celery_app = Celery("wh_project")

# read config from Django settings, using CELERY_ prefix
celery_app.config_from_object("django.conf:settings", namespace="CELERY")

# autoload tasks from installed apps
celery_app.autodiscover_tasks()
