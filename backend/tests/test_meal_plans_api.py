import pytest


@pytest.fixture
def setup(make_coach, make_client, headers_for):
    coach = make_coach("Coach Yusuf")
    member = make_client("Amina Khan", coach=coach, profile_photo="https://example.com/amina.jpg")
    other = make_client("Bilal Ahmed")
    return {
        "coach": coach,
        "member": member,
        "other": other,
        "coach_headers": headers_for(coach.user_id),
        "member_headers": headers_for(member.user_id),
        "other_headers": headers_for(other.user_id),
    }


def _create(client, setup, **fields):
    payload = {"name": "Ramadan Cut", "calories_target": 1800, "ramadan_mode": True}
    payload.update(fields)
    return client.post("/meal-plans/", json=payload, headers=setup["coach_headers"])


def test_coach_creates_and_lists_plans(client, setup):
    response = _create(client, setup, client_id=setup["member"].id)
    assert response.status_code == 201
    plan = response.json()
    assert plan["client_name"] == "Amina Khan"
    assert plan["client_photo"] == "https://example.com/amina.jpg"
    assert plan["coach_id"] == setup["coach"].id

    listed = client.get("/meal-plans/", headers=setup["coach_headers"]).json()
    assert [p["id"] for p in listed] == [plan["id"]]


def test_plans_are_scoped_to_the_assigned_client(client, setup):
    plan = _create(client, setup, client_id=setup["member"].id).json()
    _create(client, setup, name="Unassigned")

    mine = client.get("/meal-plans/", headers=setup["member_headers"]).json()
    assert [p["id"] for p in mine] == [plan["id"]]
    assert client.get("/meal-plans/", headers=setup["other_headers"]).json() == []
    assert client.get(f"/meal-plans/{plan['id']}", headers=setup["other_headers"]).status_code == 404


def test_clients_cannot_write_plans(client, setup):
    response = client.post(
        "/meal-plans/", json={"name": "Mine"}, headers=setup["member_headers"]
    )
    assert response.status_code == 403


def test_unknown_client_is_rejected(client, setup):
    assert _create(client, setup, client_id=999).status_code == 404


def test_update_and_delete(client, setup):
    plan = _create(client, setup).json()

    updated = client.put(
        f"/meal-plans/{plan['id']}",
        json={"name": "Post-Ramadan", "ramadan_mode": False},
        headers=setup["coach_headers"],
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Post-Ramadan"
    assert updated.json()["calories_target"] == 1800

    deleted = client.delete(f"/meal-plans/{plan['id']}", headers=setup["coach_headers"])
    assert deleted.status_code == 204
    assert client.get(f"/meal-plans/{plan['id']}", headers=setup["coach_headers"]).status_code == 404


def test_days_meals_and_foods(client, setup):
    plan = _create(client, setup, client_id=setup["member"].id).json()
    day_payload = {
        "day_number": 1,
        "day_name": "Monday",
        "meals": [
            {
                "meal_type": "suhoor",
                "meal_name": "Oats",
                "foods": [
                    {"food_name": "Rolled oats", "quantity": 80, "calories": 300},
                    {"food_name": "Dates", "quantity": 3, "calories": 70},
                ],
            }
        ],
    }
    first = client.post(
        f"/meal-plans/{plan['id']}/days", json=day_payload, headers=setup["coach_headers"]
    )
    assert first.status_code == 201
    foods = first.json()["meals"][0]["foods"]
    assert [(f["food_name"], f["food_order"]) for f in foods] == [("Rolled oats", 0), ("Dates", 1)]

    # Posting the same day again appends to it
    more = {"day_number": 1, "meals": [{"meal_type": "iftar", "foods": [{"food_name": "Lentil soup"}]}]}
    second = client.post(f"/meal-plans/{plan['id']}/days", json=more, headers=setup["coach_headers"])
    assert second.json()["id"] == first.json()["id"]

    detail = client.get(f"/meal-plans/{plan['id']}", headers=setup["member_headers"]).json()
    assert len(detail["days"]) == 1
    assert [m["meal_type"] for m in detail["days"][0]["meals"]] == ["suhoor", "iftar"]


def _add_day(client, setup, plan_id, day_number, foods=("Dates",)):
    payload = {
        "day_number": day_number,
        "meals": [{"meal_type": "iftar", "foods": [{"food_name": name} for name in foods]}],
    }
    response = client.post(
        f"/meal-plans/{plan_id}/days", json=payload, headers=setup["coach_headers"]
    )
    assert response.status_code == 201
    return response.json()


def test_coach_deletes_foods_meals_and_days(client, setup):
    plan = _create(client, setup, client_id=setup["member"].id).json()
    day = _add_day(client, setup, plan["id"], 1, foods=("Dates", "Water"))
    meal = day["meals"][0]
    headers = setup["coach_headers"]

    dates = meal["foods"][0]["id"]
    assert client.delete(f"/meal-plans/foods/{dates}", headers=setup["member_headers"]).status_code == 403
    assert client.delete(f"/meal-plans/foods/{dates}", headers=headers).status_code == 204
    assert client.delete(f"/meal-plans/foods/{dates}", headers=headers).status_code == 404
    detail = client.get(f"/meal-plans/{plan['id']}", headers=headers).json()
    assert [f["food_name"] for f in detail["days"][0]["meals"][0]["foods"]] == ["Water"]

    assert client.delete(f"/meal-plans/meals/{meal['id']}", headers=headers).status_code == 204
    detail = client.get(f"/meal-plans/{plan['id']}", headers=headers).json()
    assert detail["days"][0]["meals"] == []

    assert client.delete(f"/meal-plans/days/{day['id']}", headers=headers).status_code == 204
    assert client.get(f"/meal-plans/{plan['id']}", headers=headers).json()["days"] == []


def test_other_coach_cannot_delete_days(client, setup, make_coach, headers_for):
    plan = _create(client, setup).json()
    day = _add_day(client, setup, plan["id"], 1)
    stranger = make_coach("Coach Bilal")

    response = client.delete(f"/meal-plans/days/{day['id']}", headers=headers_for(stranger.user_id))
    assert response.status_code == 404


def test_client_toggles_day_completion(client, setup):
    plan = _create(client, setup, client_id=setup["member"].id).json()
    day = _add_day(client, setup, plan["id"], 3)
    headers = setup["member_headers"]
    assert day["week_number"] == 1

    done = client.put(f"/meal-plans/days/{day['id']}/completion", json={"completed": True}, headers=headers)
    assert done.status_code == 200
    assert done.json()["completed"] is True
    assert done.json()["completed_at"] is not None
    again = client.put(f"/meal-plans/days/{day['id']}/completion", json={"completed": True}, headers=headers)
    assert again.json()["completed_at"] == done.json()["completed_at"]

    detail = client.get(f"/meal-plans/{plan['id']}", headers=headers).json()
    assert detail["days"][0]["completed"] is True

    undone = client.put(f"/meal-plans/days/{day['id']}/completion", json={"completed": False}, headers=headers)
    assert undone.json() == {"meal_plan_day_id": day["id"], "completed": False, "completed_at": None}
    detail = client.get(f"/meal-plans/{plan['id']}", headers=headers).json()
    assert detail["days"][0]["completed"] is False

    coach_attempt = client.put(
        f"/meal-plans/days/{day['id']}/completion",
        json={"completed": True},
        headers=setup["coach_headers"],
    )
    assert coach_attempt.status_code == 403
    outsider = client.put(
        f"/meal-plans/days/{day['id']}/completion",
        json={"completed": True},
        headers=setup["other_headers"],
    )
    assert outsider.status_code == 404


def test_complete_week_records_weight(client, setup, db):
    plan = _create(client, setup, client_id=setup["member"].id).json()
    first_week = [_add_day(client, setup, plan["id"], number) for number in (1, 2, 7)]
    second_week = _add_day(client, setup, plan["id"], 8)
    headers = setup["member_headers"]
    assert second_week["week_number"] == 2

    done = client.post(
        f"/meal-plans/{plan['id']}/weeks/1/complete", json={"weight_kg": 72.5}, headers=headers
    )
    assert done.status_code == 200
    assert done.json()["week_number"] == 1
    assert done.json()["weight_kg"] == 72.5

    detail = client.get(f"/meal-plans/{plan['id']}", headers=headers).json()
    completed = {d["id"]: d["completed"] for d in detail["days"]}
    assert all(completed[d["id"]] for d in first_week)
    assert completed[second_week["id"]] is False
    assert [(w["week_number"], w["weight_kg"]) for w in detail["week_completions"]] == [(1, 72.5)]

    db.expire_all()
    assert setup["member"].weight_kg == 72.5

    # Completing the same week again keeps one record with the newer weight
    again = client.post(
        f"/meal-plans/{plan['id']}/weeks/1/complete", json={"weight_kg": 71.8}, headers=headers
    )
    assert again.status_code == 200
    detail = client.get(f"/meal-plans/{plan['id']}", headers=headers).json()
    assert [(w["week_number"], w["weight_kg"]) for w in detail["week_completions"]] == [(1, 71.8)]


def test_complete_week_validation(client, setup):
    plan = _create(client, setup, client_id=setup["member"].id).json()
    _add_day(client, setup, plan["id"], 1)
    headers = setup["member_headers"]

    missing = client.post(
        f"/meal-plans/{plan['id']}/weeks/3/complete", json={"weight_kg": 70}, headers=headers
    )
    assert missing.status_code == 404
    no_weight = client.post(f"/meal-plans/{plan['id']}/weeks/1/complete", json={}, headers=headers)
    assert no_weight.status_code == 422
    coach_attempt = client.post(
        f"/meal-plans/{plan['id']}/weeks/1/complete",
        json={"weight_kg": 70},
        headers=setup["coach_headers"],
    )
    assert coach_attempt.status_code == 403
