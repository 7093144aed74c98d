"""
Frequency parsing: free-text prescription frequency -> schedule descriptor.

Frequency text is clinical shorthand typed by users ("2x/day", "once daily",
"every 8h"). Parsing never rejects input; anything unrecognised becomes a
single morning dose.
"""
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

MORNING = "09:00"
EVENING = "21:00"

_TWICE_DAILY = re.compile(r"(2x|twice).*(day)")
_ONCE_DAILY = re.compile(r"(1x|once|daily)")
_EVERY_N_HOURS = re.compile(r"every\s+(\d+)\s*h")


@dataclass(frozen=True)
class Times:
    """Fixed daily dose times, as ordered "HH:MM" strings."""
    times: Tuple[str, ...]
    kind: str = "times"


@dataclass(frozen=True)
class Interval:
    """Fixed-period dosing every ``hours`` hours."""
    hours: int
    kind: str = "interval"


Schedule = Union[Times, Interval]

DEFAULT_SCHEDULE = Times((MORNING,))


def _twice_daily(text: str) -> Optional[Schedule]:
    if _TWICE_DAILY.search(text):
        return Times((MORNING, EVENING))
    return None


def _once_daily(text: str) -> Optional[Schedule]:
    if _ONCE_DAILY.search(text):
        return Times((MORNING,))
    return None


def _every_n_hours(text: str) -> Optional[Schedule]:
    match = _EVERY_N_HOURS.search(text)
    if match:
        return Interval(max(1, int(match.group(1))))
    return None


# Checked in order, first match wins
MATCHERS: List[Callable[[str], Optional[Schedule]]] = [
    _twice_daily,
    _once_daily,
    _every_n_hours,
]


def parse_frequency(frequency) -> Schedule:
    text = str(frequency or "").lower()
    for matcher in MATCHERS:
        schedule = matcher(text)
        if schedule is not None:
            return schedule
    return DEFAULT_SCHEDULE


def parse_time_of_day(value: str) -> Tuple[int, int]:
    """Split "HH:MM" into (hour, minute)."""
    hour, minute = value.split(":")
    return int(hour), int(minute)
