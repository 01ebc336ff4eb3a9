from datetime import datetime, timedelta, timezone

from mentalbase.db.types import UTCDateTime

TOKYO = timezone(timedelta(hours=9))


def test_bind_converts_offsets_to_utc():
    value = datetime(2026, 10, 19, 7, 0, tzinfo=TOKYO)

    bound = UTCDateTime().process_bind_param(value, dialect=None)

    assert bound == value
    assert bound.tzinfo == timezone.utc
    assert bound.hour == 22


def test_naive_values_are_utc():
    naive = datetime(2026, 10, 18, 22, 0)
    col = UTCDateTime()

    assert col.process_bind_param(naive, dialect=None) == naive.replace(tzinfo=timezone.utc)
    assert col.process_result_value(naive, dialect=None).tzinfo == timezone.utc
    assert col.process_bind_param(None, dialect=None) is None


def test_goal_deadline_and_reflection_dates_round_trip_as_utc(db, make, client_user):
    deadline = datetime(2026, 12, 31, 23, 0, tzinfo=timezone(timedelta(hours=-5)))
    goal = make.goal(client_user, deadline=deadline)
    reflection = make.reflection(
        client_user,
        start_date=datetime(2026, 10, 12, 0, 0, tzinfo=TOKYO),
        end_date=datetime(2026, 10, 18, 23, 59, tzinfo=TOKYO),
    )

    db.expire_all()

    assert goal.deadline == datetime(2027, 1, 1, 4, 0, tzinfo=timezone.utc)
    assert goal.deadline.tzinfo == timezone.utc
    assert reflection.start_date == datetime(2026, 10, 11, 15, 0, tzinfo=timezone.utc)
