from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from zoneinfo import available_timezones

from trackii.reminders.occurrences import (
    EPOCH,
    UNKNOWN_PROFILE_NAME,
    daily_dose_times,
    dose_title,
    generate_occurrences,
    next_interval_boundary,
    occurrence_key,
)
from trackii.reminders.schedule import Interval, Times

UTC = timezone.utc


def make_rx(**overrides):
    fields = dict(id=7, profile_id=3, name="Vitamin D", dosage="1000IU", notes=None, end_date=None)
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_occurrence_key_uses_millisecond_utc_timestamp():
    ts = datetime(2024, 1, 1, 16, 0, tzinfo=UTC)
    assert occurrence_key(12, ts) == "12:2024-01-01T16:00:00.000Z"


def test_dose_title():
    assert dose_title("Amoxicillin", "500mg") == "Take Amoxicillin 500mg"
    assert dose_title("Amoxicillin", None) == "Take Amoxicillin"
    assert dose_title("Amoxicillin", "") == "Take Amoxicillin"


def test_times_schedule_expands_today_and_tomorrow_within_window():
    now = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
    window_end = datetime(2024, 1, 2, 10, 0, tzinfo=UTC)
    result = generate_occurrences(make_rx(), Times(("09:00", "21:00")), now, window_end, "Mia")

    assert [o.scheduled_at for o in result] == [
        datetime(2024, 1, 1, 9, 0, tzinfo=UTC),
        datetime(2024, 1, 1, 21, 0, tzinfo=UTC),
        datetime(2024, 1, 2, 9, 0, tzinfo=UTC),
    ]
    assert result[0].key == "7:2024-01-01T09:00:00.000Z"
    assert result[0].title == "Take Vitamin D 1000IU"
    assert result[0].profile_name == "Mia"
    assert result[0].type == "medication"
    assert result[0].notes == ""


def test_times_schedule_respects_24h_window():
    now = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
    result = generate_occurrences(make_rx(), Times(("09:00", "21:00")), now, now + timedelta(hours=24))
    assert [o.scheduled_at.hour for o in result] == [9, 21]


def test_times_schedule_skips_slots_already_past():
    now = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    result = generate_occurrences(make_rx(), Times(("09:00",)), now, now + timedelta(hours=24))
    assert [o.scheduled_at for o in result] == [datetime(2024, 1, 2, 9, 0, tzinfo=UTC)]


def test_times_schedule_includes_slot_equal_to_now():
    now = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
    result = generate_occurrences(make_rx(), Times(("09:00",)), now, now + timedelta(hours=24))
    assert result[0].scheduled_at == now
    assert len(result) == 2


@pytest.mark.skipif("America/New_York" not in available_timezones(), reason="no tz database")
def test_daily_dose_times_in_configured_zone():
    now = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
    result = daily_dose_times(["09:00"], now, tz_name="America/New_York")
    # 09:00 EST is 14:00 UTC
    assert result[0] == datetime(2024, 1, 1, 14, 0, tzinfo=UTC)


def test_naive_now_is_treated_as_utc():
    now = datetime(2024, 1, 1, 8, 0)
    result = generate_occurrences(make_rx(), Times(("09:00",)), now, now + timedelta(hours=24))
    assert result[0].scheduled_at == datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def test_interval_next_boundary_on_8h_grid():
    now = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    assert next_interval_boundary(now, 8) == datetime(2024, 1, 1, 16, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "now",
    [
        datetime(2024, 1, 1, 0, 0, tzinfo=UTC),
        datetime(2024, 3, 5, 7, 59, 59, 999000, tzinfo=UTC),
        datetime(2024, 6, 30, 23, 0, 1, tzinfo=UTC),
    ],
)
def test_interval_boundary_is_smallest_multiple_not_before_now(now):
    step = timedelta(hours=8)
    ts = next_interval_boundary(now, 8)
    assert (ts - EPOCH) % step == timedelta(0)
    assert ts >= now
    assert ts - step < now


def test_interval_emits_single_occurrence():
    now = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    result = generate_occurrences(make_rx(), Interval(4), now, now + timedelta(hours=24))
    assert len(result) == 1
    assert result[0].key == "7:2024-01-01T12:00:00.000Z"
    assert result[0].profile_name == UNKNOWN_PROFILE_NAME


def test_interval_past_end_date_emits_nothing():
    now = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    rx = make_rx(end_date=datetime(2024, 1, 1, 12, 0))
    assert generate_occurrences(rx, Interval(8), now, now + timedelta(hours=24)) == []


def test_interval_on_end_date_is_kept():
    now = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    rx = make_rx(end_date=datetime(2024, 1, 1, 16, 0))
    assert len(generate_occurrences(rx, Interval(8), now, now + timedelta(hours=24))) == 1


def test_keys_are_stable_across_calls():
    now = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
    first = generate_occurrences(make_rx(), Times(("09:00",)), now, now + timedelta(hours=24))
    later = now + timedelta(minutes=30)
    second = generate_occurrences(make_rx(), Times(("09:00",)), later, later + timedelta(hours=24))
    assert first[0].key == second[0].key


def test_unknown_schedule_raises():
    with pytest.raises(TypeError):
        generate_occurrences(make_rx(), object(), datetime.now(UTC), datetime.now(UTC))
