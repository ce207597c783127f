# checkout/celery_worker.py
from celery import Celery

from checkout.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "checkout",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# explicite import taskow, zeby worker je zarejestrowal
celery_app.conf.imports = ("checkout.services.notification_service",)
celery_app.conf.timezone = "UTC"
celery_app.conf.task_ignore_result = True
