"""
Dismissal stores.

A dismissal suppresses one occurrence key for one user until ``expires_at``.
Expiry is always enforced when reading, whether or not the backend has
physically removed the entry yet.
"""
import logging
from datetime import datetime
from typing import Iterable, Set

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from trackii.models.reminder_dismissal import ReminderDismissal
from trackii.utils.timezone import iso_millis, parse_iso, to_utc_aware, to_utc_naive, utc_now

logger = logging.getLogger(__name__)


class DismissalStore:
    """Interface shared by the dismissal backends."""

    def find_active(self, user_id: int, keys: Iterable[str], now: datetime) -> Set[str]:
        raise NotImplementedError

    def upsert(self, user_id: int, key: str, expires_at: datetime) -> None:
        raise NotImplementedError

    def purge_expired(self, now: datetime) -> int:
        raise NotImplementedError


class SqlDismissalStore(DismissalStore):
    """Dismissals in the ``reminder_dismissals`` table, swept by a periodic task."""

    def __init__(self, db: Session):
        self.db = db

    def find_active(self, user_id: int, keys: Iterable[str], now: datetime) -> Set[str]:
        keys = list(keys)
        if not keys:
            return set()
        stmt = (
            select(ReminderDismissal.key)
            .where(ReminderDismissal.user_id == user_id)
            .where(ReminderDismissal.key.in_(keys))
            .where(ReminderDismissal.expires_at > to_utc_naive(now))
        )
        return set(self.db.execute(stmt).scalars())

    def _find(self, user_id: int, key: str):
        return (
            self.db.query(ReminderDismissal)
            .filter(ReminderDismissal.user_id == user_id, ReminderDismissal.key == key)
            .first()
        )

    def upsert(self, user_id: int, key: str, expires_at: datetime) -> None:
        expires_at = to_utc_naive(expires_at)
        existing = self._find(user_id, key)
        if existing:
            existing.expires_at = expires_at
            self.db.add(existing)
            self.db.commit()
            return

        try:
            self.db.add(ReminderDismissal(user_id=user_id, key=key, expires_at=expires_at))
            self.db.commit()
        except IntegrityError:
            # Inserted concurrently for the same user and key: overwrite its expiry
            self.db.rollback()
            logger.debug(f"Dismissal {key} for user {user_id} already exists, updating expiry")
            self.db.query(ReminderDismissal).filter(
                ReminderDismissal.user_id == user_id, ReminderDismissal.key == key
            ).update({ReminderDismissal.expires_at: expires_at}, synchronize_session="fetch")
            self.db.commit()

    def purge_expired(self, now: datetime) -> int:
        result = self.db.execute(
            delete(ReminderDismissal).where(ReminderDismissal.expires_at <= to_utc_naive(now))
        )
        self.db.commit()
        return result.rowcount or 0


class RedisDismissalStore(DismissalStore):
    """Dismissals as Redis keys carrying a native TTL."""

    KEY_PREFIX = "reminder:dismissal"

    def __init__(self, client):
        self.redis = client

    def _redis_key(self, user_id: int, key: str) -> str:
        return f"{self.KEY_PREFIX}:{user_id}:{key}"

    def find_active(self, user_id: int, keys: Iterable[str], now: datetime) -> Set[str]:
        keys = list(keys)
        if not keys:
            return set()
        now = to_utc_aware(now)
        values = self.redis.mget([self._redis_key(user_id, k) for k in keys])
        active = set()
        for key, value in zip(keys, values):
            if value is None:
                continue
            if isinstance(value, bytes):
                value = value.decode()
            expires_at = parse_iso(value)
            if expires_at is not None and expires_at > now:
                active.add(key)
        return active

    def upsert(self, user_id: int, key: str, expires_at: datetime) -> None:
        name = self._redis_key(user_id, key)
        ttl_ms = int((to_utc_aware(expires_at) - utc_now()).total_seconds() * 1000)
        if ttl_ms <= 0:
            # Already expired: nothing left to suppress
            self.redis.delete(name)
            return
        self.redis.set(name, iso_millis(expires_at), px=ttl_ms)

    def purge_expired(self, now: datetime) -> int:
        return 0
