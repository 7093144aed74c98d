import pytest

from trackii.reminders.schedule import (
    DEFAULT_SCHEDULE,
    EVENING,
    MORNING,
    Interval,
    Times,
    parse_frequency,
    parse_time_of_day,
)


@pytest.mark.parametrize("text", ["2x/day", "Twice a day", "twice daily", "2X per DAY"])
def test_twice_daily_yields_morning_and_evening(text):
    assert parse_frequency(text) == Times((MORNING, EVENING))
    assert parse_frequency(text).times == ("09:00", "21:00")


@pytest.mark.parametrize("text", ["daily", "Once", "1x", "once a day", "DAILY with food"])
def test_once_daily_yields_morning(text):
    assert parse_frequency(text) == Times(("09:00",))


@pytest.mark.parametrize("text,hours", [("every 8h", 8), ("Every 12 hours", 12), ("every  4 h", 4)])
def test_every_n_hours(text, hours):
    schedule = parse_frequency(text)
    assert isinstance(schedule, Interval)
    assert schedule.hours == hours
    assert schedule.kind == "interval"


def test_zero_hours_is_raised_to_one():
    assert parse_frequency("every 0h") == Interval(1)


def test_twice_daily_wins_over_once_daily():
    # "twice daily" also contains "daily"
    assert parse_frequency("twice daily").times == ("09:00", "21:00")


def test_once_daily_wins_over_interval():
    assert parse_frequency("daily, every 6h") == Times(("09:00",))


@pytest.mark.parametrize("text", ["", None, "as needed", "weekly", "every other week", 42])
def test_unrecognized_falls_back_to_default(text):
    assert parse_frequency(text) == DEFAULT_SCHEDULE


def test_parse_time_of_day():
    assert parse_time_of_day("09:00") == (9, 0)
    assert parse_time_of_day("21:30") == (21, 30)
