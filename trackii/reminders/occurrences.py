"""
Expansion of a schedule descriptor into concrete dose occurrences.

Occurrences are values computed fresh for every request; nothing here is
persisted. An occurrence key is ``"{prescription_id}:{iso timestamp}"`` and
must stay byte-identical across regenerations so dismissals keep matching.
"""
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone as dt_timezone
from typing import List, Optional

from trackii.reminders.config import settings
from trackii.reminders.schedule import Interval, Schedule, Times, parse_time_of_day
from trackii.utils.timezone import get_zoneinfo, iso_millis, to_utc_aware

KEY_SEPARATOR = ":"
UNKNOWN_PROFILE_NAME = "—"
EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)


@dataclass(frozen=True)
class Occurrence:
    key: str
    scheduled_at: datetime
    title: str
    profile_id: int
    profile_name: str
    notes: str = ""
    type: str = "medication"


def occurrence_key(prescription_id, scheduled_at: datetime) -> str:
    return f"{prescription_id}{KEY_SEPARATOR}{iso_millis(scheduled_at)}"


def dose_title(name: str, dosage: Optional[str]) -> str:
    if dosage:
        return f"Take {name} {dosage}"
    return f"Take {name}"


def next_interval_boundary(now: datetime, hours: int) -> datetime:
    """Smallest multiple of ``hours`` since the Unix epoch that is >= ``now``."""
    step = timedelta(hours=hours)
    elapsed = to_utc_aware(now) - EPOCH
    steps = -(-elapsed // step)
    return EPOCH + steps * step


def daily_dose_times(times, now: datetime, days: int = 2, tz_name: Optional[str] = None) -> List[datetime]:
    """Each time-of-day on today's and the following calendar dates, as UTC datetimes."""
    tz = get_zoneinfo(tz_name or settings.TIMEZONE)
    today = to_utc_aware(now).astimezone(tz).date()
    result = []
    for offset in range(days):
        day = today + timedelta(days=offset)
        for value in times:
            hour, minute = parse_time_of_day(value)
            local = datetime.combine(day, time(hour, minute), tzinfo=tz)
            result.append(local.astimezone(dt_timezone.utc))
    return result


def generate_occurrences(
    prescription,
    schedule: Schedule,
    now: datetime,
    window_end: datetime,
    profile_name: Optional[str] = None,
) -> List[Occurrence]:
    now = to_utc_aware(now)
    window_end = to_utc_aware(window_end)

    if isinstance(schedule, Times):
        slots = [ts for ts in daily_dose_times(schedule.times, now) if now <= ts <= window_end]
    elif isinstance(schedule, Interval):
        # Only the next dose is emitted, even when more steps fit the window
        next_ts = next_interval_boundary(now, schedule.hours)
        end_date = to_utc_aware(getattr(prescription, "end_date", None))
        if end_date is not None and next_ts > end_date:
            return []
        slots = [next_ts]
    else:
        raise TypeError(f"Unknown schedule: {schedule!r}")

    title = dose_title(prescription.name, prescription.dosage)
    return [
        Occurrence(
            key=occurrence_key(prescription.id, ts),
            scheduled_at=ts,
            title=title,
            profile_id=prescription.profile_id,
            profile_name=profile_name or UNKNOWN_PROFILE_NAME,
            notes=prescription.notes or "",
        )
        for ts in slots
    ]
