from sqlalchemy import text

from halal_gains.db.session import create_db_engine
from halal_gains.maintenance import (
    add_coach_column,
    assign_plans,
    fix_workout_plan_client_ids,
    reseed_coach_photos,
)
from halal_gains.maintenance.schema import apply_or_print, has_column
from halal_gains.models.profile import ClientProfile, CoachProfile
from halal_gains.models.workout_plan import WorkoutPlan


def test_apply_or_print_prints_rejected_sql(engine, capsys):
    statements = ["ALTER TABLE no_such_table ADD COLUMN coach_id INTEGER"]
    assert apply_or_print(engine, statements) is False
    out = capsys.readouterr().out
    assert "Run the following SQL manually" in out
    assert "ALTER TABLE no_such_table ADD COLUMN coach_id INTEGER;" in out


def test_add_coach_column_on_legacy_table(capsys):
    legacy = create_db_engine("sqlite://")
    with legacy.begin() as conn:
        conn.execute(text("CREATE TABLE coach_profiles (id INTEGER PRIMARY KEY)"))
        conn.execute(
            text("CREATE TABLE client_profiles (id INTEGER PRIMARY KEY, user_id INTEGER, full_name VARCHAR(255))")
        )
    assert not has_column(legacy, "client_profiles", "coach_id")

    assert add_coach_column.ensure_coach_column(legacy) is True
    assert has_column(legacy, "client_profiles", "coach_id")
    # Running it twice is harmless
    assert add_coach_column.ensure_coach_column(legacy) is True
    assert "already exists" in capsys.readouterr().out
    legacy.dispose()


def test_add_coach_column_prints_guarded_sql_on_failure(capsys):
    # No client_profiles table at all, so the ALTER is rejected
    empty = create_db_engine("sqlite://")

    assert add_coach_column.ensure_coach_column(empty) is False
    out = capsys.readouterr().out
    assert "Run the following SQL manually" in out
    assert "ALTER TABLE client_profiles ADD COLUMN IF NOT EXISTS coach_id INTEGER" in out
    assert "CREATE INDEX IF NOT EXISTS ix_client_profiles_coach_id" in out
    empty.dispose()


def test_default_coach_assignment(db, make_coach, make_client):
    first = make_coach("Coach Aisha")
    second = make_coach("Coach Bilal")
    kept = make_client("Kept", coach=second)
    loose = make_client("Loose")

    assert add_coach_column.assign_default_coach(db) == 1
    db.expire_all()
    assert db.get(ClientProfile, loose.id).coach_id == first.id
    assert db.get(ClientProfile, kept.id).coach_id == second.id


def test_add_coach_column_main(engine, make_coach, make_client, monkeypatch, capsys):
    make_coach()
    make_client()
    monkeypatch.setattr(add_coach_column, "get_engine", lambda: engine)
    assert add_coach_column.main() == 0
    assert "1 client(s) assigned" in capsys.readouterr().out


def test_assign_plans_only_for_single_client_coaches(db, make_coach, make_client):
    solo = make_coach("Coach Solo")
    busy = make_coach("Coach Busy")
    only_client = make_client("Only Client", coach=solo)
    make_client("Busy One", coach=busy)
    make_client("Busy Two", coach=busy)
    already = make_client("Already")

    open_plan = WorkoutPlan(coach_id=solo.id, name="Open plan")
    taken_plan = WorkoutPlan(coach_id=solo.id, client_id=already.id, name="Taken plan")
    busy_plan = WorkoutPlan(coach_id=busy.id, name="Busy plan")
    db.add_all([open_plan, taken_plan, busy_plan])
    db.commit()

    assert assign_plans.assign_plans(db) == 1
    db.expire_all()
    assert db.get(WorkoutPlan, open_plan.id).client_id == only_client.id
    assert db.get(WorkoutPlan, taken_plan.id).client_id == already.id
    assert db.get(WorkoutPlan, busy_plan.id).client_id is None


def test_fix_workout_plan_client_ids(db, make_coach, make_client, make_user):
    coach = make_coach()
    # Burn a few user ids so account ids and profile ids diverge
    for index in range(3):
        make_user(f"filler{index}@example.com")
    member = make_client("Amina Khan")
    assert member.user_id != member.id

    correct = WorkoutPlan(coach_id=coach.id, client_id=member.id, name="Correct")
    legacy = WorkoutPlan(coach_id=coach.id, client_id=member.user_id, name="Legacy")
    orphan = WorkoutPlan(coach_id=coach.id, client_id=4242, name="Orphan")
    db.add_all([correct, legacy, orphan])
    db.commit()

    fixed, unresolved = fix_workout_plan_client_ids.fix_client_ids(db)

    assert fixed == 1
    assert unresolved == [orphan.id]
    db.expire_all()
    assert db.get(WorkoutPlan, legacy.id).client_id == member.id
    assert db.get(WorkoutPlan, correct.id).client_id == member.id


def test_reseed_coach_photos_rotates(db, make_coach):
    coaches = [make_coach(f"Coach {name}") for name in ("A", "B", "C")]
    photos = ["https://example.com/1.jpg", "https://example.com/2.jpg"]

    assert reseed_coach_photos.reseed_photos(db, photos) == 3
    db.expire_all()
    assigned = [db.get(CoachProfile, coach.id).profile_photos for coach in coaches]
    assert assigned == [[photos[0]], [photos[1]], [photos[0]]]


def test_reseed_with_no_photos(db, make_coach):
    make_coach()
    assert reseed_coach_photos.reseed_photos(db, []) == 0
