"""
Reminder engine: upcoming medication doses for a user, minus dismissals.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from trackii import crud
from trackii.reminders.config import settings
from trackii.reminders.dismissals import DismissalStore
from trackii.reminders.metrics import (
    reminder_generation_failures_total,
    reminder_occurrences_generated_total,
    reminders_dismissed_total,
    reminders_listed_total,
)
from trackii.reminders.occurrences import KEY_SEPARATOR, Occurrence, generate_occurrences
from trackii.reminders.schedule import parse_frequency
from trackii.schemas.reminder import DismissalResult
from trackii.utils.timezone import parse_iso, to_utc_aware

logger = logging.getLogger(__name__)


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return settings.DEFAULT_LIMIT
    return min(max(int(limit), 1), settings.MAX_LIMIT)


def split_key(key: str) -> Tuple[str, str]:
    """Split an occurrence key into (prescription id, ISO timestamp) on the first separator."""
    prescription_id, _, iso = key.partition(KEY_SEPARATOR)
    return prescription_id, iso


def dismissal_expiry(key: str, now: datetime) -> datetime:
    """
    Dismissals of a well-formed key last until shortly after the dose time;
    once the dose is past it drops out of the window by itself. Keys without a
    parseable timestamp are suppressed for a fixed fallback period instead.
    """
    _, iso = split_key(key)
    scheduled_at = parse_iso(iso)
    if scheduled_at is not None:
        try:
            return scheduled_at + timedelta(minutes=settings.DISMISS_GRACE_MINUTES)
        except OverflowError:
            logger.warning(f"Dismissal key {key} is past the supported date range")
    return to_utc_aware(now) + timedelta(hours=settings.DISMISS_FALLBACK_HOURS)


class ReminderEngine:
    def __init__(self, db: Session, dismissals: DismissalStore):
        self.db = db
        self.dismissals = dismissals

    def list_reminders(self, user_id: int, now: datetime, limit: Optional[int] = None) -> List[Occurrence]:
        now = to_utc_aware(now)
        window_end = now + timedelta(hours=settings.WINDOW_HOURS)
        cap = clamp_limit(limit)

        profiles = crud.profile.find_by_owner(self.db, user_id=user_id)
        name_by_id = dict(profiles)
        prescriptions = crud.prescription.find_eligible(
            self.db, profile_ids=list(name_by_id), now=now
        )

        candidates: List[Occurrence] = []
        for rx in prescriptions:
            try:
                schedule = parse_frequency(rx.frequency)
                candidates.extend(
                    generate_occurrences(rx, schedule, now, window_end, name_by_id.get(rx.profile_id))
                )
            except Exception:
                reminder_generation_failures_total.inc()
                logger.exception(f"Skipping reminders for prescription {rx.id}")
        reminder_occurrences_generated_total.inc(len(candidates))

        dismissed = self.dismissals.find_active(user_id, [c.key for c in candidates], now)
        items = [c for c in candidates if c.key not in dismissed]
        items.sort(key=lambda c: c.scheduled_at)

        reminders_listed_total.inc()
        return items[:cap]

    def dismiss(self, user_id: int, key: str, now: datetime) -> DismissalResult:
        expires_at = dismissal_expiry(key, now)
        self.dismissals.upsert(user_id, key, expires_at)
        reminders_dismissed_total.inc()
        logger.info(f"User {user_id} dismissed reminder {key} until {expires_at.isoformat()}")
        return DismissalResult(key=key, dismissed=True, until=expires_at)
