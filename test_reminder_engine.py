from datetime import datetime, timedelta, timezone
from unittest import mock

from conftest import make_user
from trackii import crud, schemas
from trackii.models.reminder_dismissal import ReminderDismissal
from trackii.reminders.dismissals import SqlDismissalStore
from trackii.reminders.schedule import parse_frequency
from trackii.reminders.service import ReminderEngine, clamp_limit, dismissal_expiry, split_key

UTC = timezone.utc
NOW = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)


def add_rx(db, profile, **fields):
    data = dict(profile_id=profile.id, name="Amoxicillin", dosage="500mg", frequency="every 8h",
                start_date=NOW - timedelta(days=1))
    data.update(fields)
    return crud.prescription.create_for_profile(db, obj_in=schemas.PrescriptionCreate(**data))


def engine_for(db):
    return ReminderEngine(db, SqlDismissalStore(db))


def test_end_to_end_interval_reminder(db, user, profile):
    rx = add_rx(db, profile)
    items = engine_for(db).list_reminders(user.id, NOW)

    assert len(items) == 1
    assert items[0].key == f"{rx.id}:2024-01-01T16:00:00.000Z"
    assert items[0].title == "Take Amoxicillin 500mg"
    assert items[0].scheduled_at == datetime(2024, 1, 1, 16, 0, tzinfo=UTC)
    assert items[0].profile_id == profile.id
    assert items[0].profile_name == "Mia"
    assert items[0].type == "medication"


def test_ineligible_prescriptions_are_excluded(db, user, profile):
    add_rx(db, profile, name="Inactive", active=False)
    add_rx(db, profile, name="Future", start_date=NOW + timedelta(hours=1))
    add_rx(db, profile, name="Ended", end_date=NOW - timedelta(minutes=1))
    kept = add_rx(db, profile, name="Current", end_date=NOW + timedelta(days=3))

    items = engine_for(db).list_reminders(user.id, NOW)
    assert [i.key.split(":")[0] for i in items] == [str(kept.id)]


def test_other_users_profiles_are_excluded(db, user, profile):
    stranger = make_user(db, email="stranger@example.com")
    their_profile = crud.profile.create_with_owner(
        db, obj_in=schemas.ProfileCreate(name="Other"), user_id=stranger.id
    )
    add_rx(db, their_profile)

    assert engine_for(db).list_reminders(user.id, NOW) == []
    assert len(engine_for(db).list_reminders(stranger.id, NOW)) == 1


def test_user_without_profiles_gets_nothing(db, user):
    assert engine_for(db).list_reminders(user.id, NOW) == []


def test_sorted_ascending_and_capped(db, user, profile):
    now = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
    add_rx(db, profile, name="Iron", dosage=None, frequency="2x/day")
    add_rx(db, profile, name="Amoxicillin", frequency="every 8h")

    engine = engine_for(db)
    items = engine.list_reminders(user.id, now)
    assert [i.scheduled_at.hour for i in items] == [8, 9, 21]
    assert items == sorted(items, key=lambda i: i.scheduled_at)

    assert len(engine.list_reminders(user.id, now, limit=2)) == 2
    assert len(engine.list_reminders(user.id, now, limit=0)) == 1
    assert len(engine.list_reminders(user.id, now, limit=1000)) == 3


def test_clamp_limit():
    assert clamp_limit(None) == 100
    assert clamp_limit(0) == 1
    assert clamp_limit(-5) == 1
    assert clamp_limit(50) == 50
    assert clamp_limit(1000) == 200


def test_one_failing_prescription_does_not_abort_batch(db, user, profile):
    add_rx(db, profile, name="Broken", frequency="explode")
    good = add_rx(db, profile, name="Fine", frequency="every 8h")

    def flaky(frequency):
        if frequency == "explode":
            raise ValueError("unparseable")
        return parse_frequency(frequency)

    with mock.patch("trackii.reminders.service.parse_frequency", side_effect=flaky):
        items = engine_for(db).list_reminders(user.id, NOW)

    assert [i.key for i in items] == [f"{good.id}:2024-01-01T16:00:00.000Z"]


def test_split_key_uses_first_separator():
    assert split_key("12:2024-01-01T16:00:00.000Z") == ("12", "2024-01-01T16:00:00.000Z")
    assert split_key("garbage") == ("garbage", "")


def test_dismissal_expiry_policy():
    assert dismissal_expiry("1:2024-01-01T16:00:00.000Z", NOW) == datetime(2024, 1, 1, 16, 5, tzinfo=UTC)
    assert dismissal_expiry("1:not-a-date", NOW) == NOW + timedelta(hours=24)
    assert dismissal_expiry("nonsense", NOW) == NOW + timedelta(hours=24)


def test_dismiss_hides_occurrence(db, user, profile):
    rx = add_rx(db, profile)
    engine = engine_for(db)
    key = f"{rx.id}:2024-01-01T16:00:00.000Z"

    result = engine.dismiss(user.id, key, NOW)
    assert result.key == key
    assert result.dismissed is True
    assert result.until == datetime(2024, 1, 1, 16, 5, tzinfo=UTC)

    assert engine.list_reminders(user.id, NOW) == []


def test_dismiss_is_idempotent(db, user, profile):
    rx = add_rx(db, profile)
    engine = engine_for(db)
    key = f"{rx.id}:2024-01-01T16:00:00.000Z"

    engine.dismiss(user.id, key, NOW)
    engine.dismiss(user.id, key, NOW + timedelta(minutes=1))

    rows = db.query(ReminderDismissal).filter(ReminderDismissal.user_id == user.id).all()
    assert len(rows) == 1
    assert rows[0].expires_at == datetime(2024, 1, 1, 16, 5)


def test_dismissal_only_applies_to_its_user(db, user, profile):
    rx = add_rx(db, profile)
    stranger = make_user(db, email="stranger@example.com")
    engine_for(db).dismiss(stranger.id, f"{rx.id}:2024-01-01T16:00:00.000Z", NOW)

    assert len(engine_for(db).list_reminders(user.id, NOW)) == 1


def test_expired_dismissal_no_longer_hides(db, user, profile):
    now = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
    rx = add_rx(db, profile, frequency="daily")
    key = f"{rx.id}:2024-01-01T09:00:00.000Z"
    store = SqlDismissalStore(db)
    store.upsert(user.id, key, datetime(2024, 1, 1, 8, 45, tzinfo=UTC))
    engine = ReminderEngine(db, store)

    assert engine.list_reminders(user.id, now + timedelta(minutes=30)) == []
    # Not yet swept, still filtered out on read
    items = engine.list_reminders(user.id, now + timedelta(minutes=45))
    assert [i.key for i in items] == [key]


def test_malformed_key_dismissal_falls_back(db, user):
    result = engine_for(db).dismiss(user.id, "not-a-key", NOW)
    assert result.until == NOW + timedelta(hours=24)


def test_dismissal_expiry_at_end_of_date_range_falls_back():
    assert dismissal_expiry("1:9999-12-31T23:58:00.000Z", NOW) == NOW + timedelta(hours=24)
