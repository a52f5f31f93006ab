def test_register_login_and_session(client):
    payload = {
        "email": "amina@example.com",
        "password": "supersecure",
        "full_name": "Amina Khan",
    }
    register_response = client.post("/auth/register", json=payload)
    assert register_response.status_code == 200
    tokens = register_response.json()
    assert tokens["access_token"]

    duplicate = client.post("/auth/register", json=payload)
    assert duplicate.status_code == 400

    login_response = client.post(
        "/auth/login",
        json={"email": payload["email"], "password": payload["password"]},
    )
    assert login_response.status_code == 200
    access = login_response.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {access}"})
    assert me.status_code == 200
    body = me.json()
    assert body["email"] == payload["email"]
    assert body["role"] == "client"
    assert body["client_profile_id"] is None


def test_login_with_wrong_password(client, make_user):
    make_user("someone@example.com")
    response = client.post(
        "/auth/login", json={"email": "someone@example.com", "password": "nope-nope"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password"


def test_refresh_issues_new_pair(client):
    tokens = client.post(
        "/auth/register",
        json={"email": "fresh@example.com", "password": "supersecure"},
    ).json()
    response = client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    assert response.json()["access_token"]

    rejected = client.post("/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert rejected.status_code == 401


def test_protected_routes_require_a_token(client):
    assert client.get("/auth/me").status_code == 401
    response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid authentication credentials"


def test_coach_session_reports_coach_role(client, make_coach, headers_for):
    coach = make_coach()
    body = client.get("/auth/me", headers=headers_for(coach.user_id)).json()
    assert body["role"] == "coach"
    assert body["coach_profile_id"] == coach.id
