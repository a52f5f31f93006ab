import pytest

from halal_gains.models.workout_plan import ExerciseCompletion, WorkoutDayCompletion


@pytest.fixture
def setup(make_coach, make_client, headers_for):
    coach = make_coach("Coach Yusuf")
    member = make_client("Amina Khan", coach=coach)
    return {
        "coach": coach,
        "member": member,
        "coach_headers": headers_for(coach.user_id),
        "member_headers": headers_for(member.user_id),
    }


def _plan(client, setup, **fields):
    payload = {
        "name": "Beginner Full Body",
        "duration": "4 weeks",
        "difficulty": "beginner",
        "client_id": setup["member"].id,
    }
    payload.update(fields)
    response = client.post("/workout-plans/", json=payload, headers=setup["coach_headers"])
    assert response.status_code == 201
    return response.json()


def test_plan_structure_and_exercise_order(client, setup):
    plan = _plan(client, setup)
    headers = setup["coach_headers"]
    assert plan["client_name"] == "Amina Khan"

    week = client.post(f"/workout-plans/{plan['id']}/weeks", json={"week_number": 1}, headers=headers)
    assert week.status_code == 201
    duplicate = client.post(
        f"/workout-plans/{plan['id']}/weeks", json={"week_number": 1}, headers=headers
    )
    assert duplicate.status_code == 409

    day = client.post(
        f"/workout-plans/weeks/{week.json()['id']}/days",
        json={"day_of_week": 1, "workout_type": "strength", "prayer_time_notes": "After Asr"},
        headers=headers,
    ).json()

    orders = []
    for name in ["Goblet Squat", "Push-up", "Dumbbell Row"]:
        exercise = client.post(
            f"/workout-plans/days/{day['id']}/exercises",
            json={"exercise_name": name, "sets": 3, "reps": 12},
            headers=headers,
        ).json()
        orders.append(exercise["exercise_order"])
    assert orders == [0, 1, 2]

    detail = client.get(f"/workout-plans/{plan['id']}", headers=headers).json()
    exercises = detail["weeks"][0]["days"][0]["exercises"]
    assert [e["exercise_name"] for e in exercises] == ["Goblet Squat", "Push-up", "Dumbbell Row"]

    removed = client.delete(f"/workout-plans/exercises/{exercises[1]['id']}", headers=headers)
    assert removed.status_code == 204
    nxt = client.post(
        f"/workout-plans/days/{day['id']}/exercises",
        json={"exercise_name": "Plank"},
        headers=headers,
    ).json()
    assert nxt["exercise_order"] == 3


def test_client_progress_and_week_completion(client, setup):
    plan = _plan(client, setup)
    for number in (1, 2):
        client.post(
            f"/workout-plans/{plan['id']}/weeks",
            json={"week_number": number},
            headers=setup["coach_headers"],
        )

    headers = setup["member_headers"]
    listed = client.get("/workout-plans/", headers=headers).json()
    assert (listed[0]["total_weeks"], listed[0]["completed_weeks"]) == (2, 0)

    done = client.post(f"/workout-plans/{plan['id']}/weeks/1/complete", headers=headers)
    assert done.status_code == 200
    again = client.post(f"/workout-plans/{plan['id']}/weeks/1/complete", headers=headers)
    assert again.json()["completed_at"] == done.json()["completed_at"]

    listed = client.get("/workout-plans/", headers=headers).json()
    assert listed[0]["completed_weeks"] == 1

    missing = client.post(f"/workout-plans/{plan['id']}/weeks/9/complete", headers=headers)
    assert missing.status_code == 404
    coach_attempt = client.post(
        f"/workout-plans/{plan['id']}/weeks/2/complete", headers=setup["coach_headers"]
    )
    assert coach_attempt.status_code == 403


def test_client_cannot_edit_plans(client, setup):
    plan = _plan(client, setup)
    headers = setup["member_headers"]
    assert client.put(
        f"/workout-plans/{plan['id']}", json={"name": "Mine now"}, headers=headers
    ).status_code == 403
    assert client.post(
        f"/workout-plans/{plan['id']}/weeks", json={"week_number": 1}, headers=headers
    ).status_code == 403
    assert client.delete(f"/workout-plans/{plan['id']}", headers=headers).status_code == 403


def test_update_and_delete_plan(client, setup):
    plan = _plan(client, setup)
    headers = setup["coach_headers"]
    updated = client.put(
        f"/workout-plans/{plan['id']}", json={"difficulty": "intermediate"}, headers=headers
    )
    assert updated.json()["difficulty"] == "intermediate"
    assert updated.json()["name"] == "Beginner Full Body"

    assert client.delete(f"/workout-plans/{plan['id']}", headers=headers).status_code == 204
    assert client.get("/workout-plans/", headers=headers).json() == []


def _day_with_exercises(client, setup, names=("Goblet Squat", "Push-up")):
    headers = setup["coach_headers"]
    plan = _plan(client, setup)
    week = client.post(
        f"/workout-plans/{plan['id']}/weeks", json={"week_number": 1}, headers=headers
    ).json()
    day = client.post(
        f"/workout-plans/weeks/{week['id']}/days", json={"day_of_week": 2}, headers=headers
    ).json()
    exercises = [
        client.post(
            f"/workout-plans/days/{day['id']}/exercises",
            json={"exercise_name": name, "sets": 3, "reps": 10},
            headers=headers,
        ).json()
        for name in names
    ]
    return day, exercises


def test_client_logs_a_workout_day(client, setup):
    day, (squat, push_up) = _day_with_exercises(client, setup)
    headers = setup["member_headers"]
    url = f"/workout-plans/days/{day['id']}/completion"

    assert client.get(url, headers=headers).json() is None

    logged = client.put(
        url,
        json={
            "notes": "Trained after Isha",
            "rating": 4,
            "exercises": [
                {
                    "workout_exercise_id": squat["id"],
                    "actual_sets": 3,
                    "actual_reps": 10,
                    "weight_used_kg": 24,
                },
                {"workout_exercise_id": push_up["id"], "completed": False},
            ],
        },
        headers=headers,
    )
    assert logged.status_code == 200
    body = logged.json()
    assert (body["notes"], body["rating"]) == ("Trained after Isha", 4)
    entries = {e["workout_exercise_id"]: e for e in body["exercise_completions"]}
    assert entries[squat["id"]]["weight_used_kg"] == 24
    assert entries[squat["id"]]["completed"] is True
    assert entries[push_up["id"]]["completed"] is False

    # Logging again updates the day and replaces the exercise entries
    relogged = client.put(
        url,
        json={"rating": 5, "exercises": [{"workout_exercise_id": push_up["id"], "actual_reps": 15}]},
        headers=headers,
    ).json()
    assert relogged["id"] == body["id"]
    assert relogged["notes"] is None
    assert relogged["rating"] == 5
    assert [e["workout_exercise_id"] for e in relogged["exercise_completions"]] == [push_up["id"]]

    assert client.get(url, headers=headers).json()["rating"] == 5


def test_workout_log_validation(client, setup, make_client, headers_for):
    day, (squat, _) = _day_with_exercises(client, setup)
    url = f"/workout-plans/days/{day['id']}/completion"
    headers = setup["member_headers"]

    assert client.put(url, json={"rating": 6}, headers=headers).status_code == 422
    unknown = client.put(
        url, json={"exercises": [{"workout_exercise_id": squat["id"] + 100}]}, headers=headers
    )
    assert unknown.status_code == 404
    assert client.put(url, json={"rating": 3}, headers=setup["coach_headers"]).status_code == 403

    outsider = make_client("Omar Ali")
    assert client.put(url, json={"rating": 3}, headers=headers_for(outsider.user_id)).status_code == 404


def test_ticking_an_exercise_logs_the_day(client, setup):
    day, (squat, push_up) = _day_with_exercises(client, setup)
    headers = setup["member_headers"]

    ticked = client.put(
        f"/workout-plans/exercises/{squat['id']}/completion", json={"completed": True}, headers=headers
    )
    assert ticked.status_code == 200
    assert ticked.json()["completed"] is True

    completion = client.get(f"/workout-plans/days/{day['id']}/completion", headers=headers).json()
    assert completion["rating"] is None
    assert [e["workout_exercise_id"] for e in completion["exercise_completions"]] == [squat["id"]]

    unticked = client.put(
        f"/workout-plans/exercises/{squat['id']}/completion", json={"completed": False}, headers=headers
    )
    assert unticked.json()["id"] == ticked.json()["id"]
    assert unticked.json()["completed"] is False

    coach_attempt = client.put(
        f"/workout-plans/exercises/{push_up['id']}/completion",
        json={"completed": True},
        headers=setup["coach_headers"],
    )
    assert coach_attempt.status_code == 403


def test_deleting_a_day_removes_its_log(client, setup, db):
    day, (squat, _) = _day_with_exercises(client, setup)
    client.put(
        f"/workout-plans/exercises/{squat['id']}/completion",
        json={"completed": True},
        headers=setup["member_headers"],
    )

    removed = client.delete(f"/workout-plans/days/{day['id']}", headers=setup["coach_headers"])
    assert removed.status_code == 204
    assert db.query(WorkoutDayCompletion).count() == 0
    assert db.query(ExerciseCompletion).count() == 0
