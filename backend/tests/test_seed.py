from halal_gains.db.seed import seed_demo_data
from halal_gains.models.conversation import Message
from halal_gains.models.profile import ClientProfile, CoachProfile
from halal_gains.models.workout_plan import WorkoutExercise


def test_seed_is_idempotent(db):
    seed_demo_data(db)
    seed_demo_data(db)

    assert db.query(CoachProfile).count() == 1
    client = db.query(ClientProfile).one()
    assert client.coach_id == db.query(CoachProfile).one().id
    assert db.query(WorkoutExercise).count() == 3
    assert db.query(Message).count() == 1
