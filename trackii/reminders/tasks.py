import logging

from celery import shared_task
from sqlalchemy.orm import Session

from trackii.db.session import SessionLocal
from trackii.utils.timezone import utc_now
from .dismissals import SqlDismissalStore
from .metrics import reminder_dismissals_purged_total

logger = logging.getLogger(__name__)


@shared_task(name="reminders.purge_expired_dismissals")
def purge_expired_dismissals_task() -> int:
    """Delete dismissals whose expiry has passed. Returns number removed."""
    db: Session = SessionLocal()
    try:
        purged = SqlDismissalStore(db).purge_expired(utc_now())
        reminder_dismissals_purged_total.inc(purged)
        logger.info(f"Purged {purged} expired reminder dismissals")
        return purged
    finally:
        db.close()
