from celery import Celery
from trackii.core.config import settings as app_settings
from .config import settings


broker_url = settings.CELERY_BROKER_URL or app_settings.redis_url
result_backend = settings.CELERY_RESULT_BACKEND or None

celery_app = Celery(
    "reminders",
    broker=broker_url,
    backend=result_backend,
)

celery_app.conf.update(
    task_acks_late=True,
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    worker_prefetch_multiplier=1,
    include=["trackii.reminders.tasks"],
)

# Celery Beat schedule for the expired dismissal sweep
celery_app.conf.beat_schedule = {
    "purge-expired-dismissals": {
        "task": "reminders.purge_expired_dismissals",
        "schedule": settings.SWEEP_INTERVAL_SECONDS,
    },
}
