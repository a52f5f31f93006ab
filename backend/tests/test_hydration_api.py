def test_reminder_lifecycle(client, make_client, headers_for):
    member = make_client()
    headers = headers_for(member.user_id)

    late = client.post(
        "/hydration-reminders/",
        json={"reminder_time": "19:15:00", "reminder_message": "After iftar"},
        headers=headers,
    )
    early = client.post(
        "/hydration-reminders/",
        json={"reminder_time": "04:30:00", "reminder_message": "Before suhoor ends"},
        headers=headers,
    )
    assert late.status_code == 201
    assert early.json()["is_active"] is True

    listed = client.get("/hydration-reminders/", headers=headers).json()
    assert [r["reminder_time"] for r in listed] == ["04:30:00", "19:15:00"]

    reminder_id = early.json()["id"]
    toggled = client.post(f"/hydration-reminders/{reminder_id}/toggle", headers=headers)
    assert toggled.json()["is_active"] is False

    updated = client.put(
        f"/hydration-reminders/{reminder_id}",
        json={"reminder_message": "Last glass before fajr"},
        headers=headers,
    )
    assert updated.json()["reminder_message"] == "Last glass before fajr"
    assert updated.json()["reminder_time"] == "04:30:00"

    assert client.delete(f"/hydration-reminders/{reminder_id}", headers=headers).status_code == 204
    assert len(client.get("/hydration-reminders/", headers=headers).json()) == 1


def test_reminders_are_private(client, make_client, headers_for):
    owner = make_client("Amina Khan")
    other = make_client("Bilal Ahmed")
    reminder = client.post(
        "/hydration-reminders/",
        json={"reminder_time": "12:00:00"},
        headers=headers_for(owner.user_id),
    ).json()

    other_headers = headers_for(other.user_id)
    assert client.get("/hydration-reminders/", headers=other_headers).json() == []
    response = client.post(f"/hydration-reminders/{reminder['id']}/toggle", headers=other_headers)
    assert response.status_code == 404
