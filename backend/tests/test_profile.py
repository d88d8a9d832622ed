from __future__ import annotations

from jobtrackr.models.profile import Profile
from jobtrackr.models.user import User


def test_profile_is_provisioned_with_user_id(users, db_session):
    user_a, user_b = users
    for user, name in ((user_a, "Test User"), (user_b, "Other User")):
        profile = db_session.get(Profile, user.id)
        assert profile is not None
        assert profile.id == user.id
        assert profile.email == user.email
        assert profile.full_name == name
        assert profile.theme == "light"
    assert db_session.query(Profile).count() == 2


def test_profile_without_metadata_gets_blank_name(db_session):
    user = User(email="bare@example.com", password_hash="x", user_metadata=None, is_active=True)
    db_session.add(user)
    db_session.commit()

    profile = db_session.get(Profile, user.id)
    assert profile.full_name == ""


def test_get_and_update_profile(client, users):
    user_a, _ = users

    res = client.get("/profile")
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == user_a.id
    assert body["full_name"] == "Test User"
    assert body["custom_columns"] == []

    res = client.put(
        "/profile",
        json={"full_name": "  Renamed  ", "theme": "dark", "custom_columns": [{"key": "salary", "label": "Salary"}]},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["full_name"] == "Renamed"
    assert body["theme"] == "dark"
    assert body["custom_columns"] == [{"key": "salary", "label": "Salary"}]

    assert client.get("/profile").json()["theme"] == "dark"


def test_invalid_theme_is_rejected(client):
    res = client.put("/profile", json={"full_name": "x", "theme": "solarized"})
    assert res.status_code == 422
    assert res.json()["error"] == "VALIDATION_ERROR"


def test_register_login_and_fetch_profile(anon_client, db_session):
    res = anon_client.post(
        "/auth/register",
        json={"email": "New.Person@Example.com", "full_name": "New Person", "password": "long_enough_pw"},
    )
    assert res.status_code == 200, res.text

    user = db_session.query(User).filter(User.email == "new.person@example.com").one()
    assert db_session.get(Profile, user.id).full_name == "New Person"

    res = anon_client.post("/auth/login", json={"email": "new.person@example.com", "password": "long_enough_pw"})
    assert res.status_code == 200
    token = res.json()["access_token"]
    assert res.json()["user_id"] == user.id

    res = anon_client.get("/profile", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json()["id"] == user.id
    assert res.json()["full_name"] == "New Person"


def test_register_rejects_short_password_and_duplicates(anon_client, users):
    res = anon_client.post("/auth/register", json={"email": "short@example.com", "password": "abc"})
    assert res.status_code == 400

    res = anon_client.post("/auth/register", json={"email": "test@example.com", "password": "long_enough_pw"})
    assert res.status_code == 409
    assert res.json()["error"] == "CONFLICT"


def test_login_with_wrong_password(anon_client, users):
    res = anon_client.post("/auth/login", json={"email": "test@example.com", "password": "nope_nope_nope"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid email or password"
