import jwt
import pytest

from meetup.models.user import User
from meetup.settings import settings


def signupBody(**overrides):
    body = {
        "firstName": "Demo",
        "lastName": "Lition",
        "email": "demo@user.io",
        "username": "Demo-lition",
        "password": "password",
    }
    body.update(overrides)
    return body


def test_signup_returns_user_and_token(client, db):
    response = client.post("/users", json=signupBody())

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["username"] == "Demo-lition"
    assert body["user"]["email"] == "demo@user.io"
    assert "hashedPassword" not in body["user"]
    assert body["token"]
    assert "token" in response.cookies

    user = db.query(User).one()
    assert len(user.hashed_password) == 60
    assert user.hashed_password != "password"


def test_signup_rejects_duplicates(client, factory):
    factory.user(email="demo@user.io", username="someone")

    response = client.post("/users", json=signupBody())

    assert response.status_code == 400
    assert response.json()["errors"] == {"email": "User with that email already exists"}


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"username": "abc"}, "username"),
        ({"username": "a" * 31}, "username"),
        ({"username": "me@user.io"}, "username"),
        ({"email": "not-an-email"}, "email"),
        ({"firstName": ""}, "firstName"),
        ({"password": "short"}, "password"),
    ],
)
def test_signup_validation(client, overrides, field):
    response = client.post("/users", json=signupBody(**overrides))

    assert response.status_code == 400
    assert field in response.json()["errors"]


@pytest.mark.parametrize("password", ["p" * 73, "\u00e9" * 37])
def test_signup_rejects_passwords_over_72_bytes(client, db, password):
    response = client.post("/users", json=signupBody(password=password))

    assert response.status_code == 400
    assert response.json()["errors"] == {
        "password": "Password must be 6 characters or more and 72 bytes or less"
    }
    assert db.query(User).count() == 0


def test_login_with_overlong_password_is_unauthorized(client):
    client.post("/users", json=signupBody())

    response = client.post("/session", json={"credential": "Demo-lition", "password": "p" * 80})

    assert response.status_code == 401


def test_login_with_username_or_email(client):
    client.post("/users", json=signupBody())
    client.cookies.clear()

    byUsername = client.post("/session", json={"credential": "Demo-lition", "password": "password"})
    byEmail = client.post("/session", json={"credential": "demo@user.io", "password": "password"})

    assert byUsername.status_code == 200
    assert byEmail.status_code == 200
    assert byEmail.json()["user"]["username"] == "Demo-lition"


def test_login_with_bad_password(client):
    client.post("/users", json=signupBody())

    response = client.post("/session", json={"credential": "Demo-lition", "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_requires_fields(client):
    response = client.post("/session", json={})

    assert response.status_code == 400
    assert response.json()["errors"] == {
        "credential": "Email or username is required",
        "password": "Password is required",
    }


def test_malformed_json_body(client):
    response = client.post("/session", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert "body" in response.json()["errors"]


def test_restore_session(client, factory, auth):
    user = factory.user()

    signedIn = client.get("/session", headers=auth(user))
    anonymous = client.get("/session")

    assert signedIn.json()["user"]["id"] == user.id
    assert anonymous.json()["user"] is None


def test_cookie_authenticates_until_logout(client):
    client.post("/users", json=signupBody())

    assert client.get("/groups/current").status_code == 200

    response = client.delete("/session")

    assert response.status_code == 200
    header = response.headers["set-cookie"].lower()
    assert header.startswith("token=")
    assert "max-age=0" in header
    assert "token" not in client.cookies
    assert client.get("/groups/current").status_code == 401


def test_invalid_and_expired_tokens_are_rejected(client, factory):
    user = factory.user()
    expired = jwt.encode({"sub": str(user.id), "iat": 0, "exp": 1}, settings.secret_key, algorithm="HS256")
    forged = jwt.encode({"sub": str(user.id), "iat": 0, "exp": 2 ** 31}, "wrong-secret", algorithm="HS256")

    for token in (expired, forged, "garbage"):
        response = client.get("/groups/current", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


def test_token_for_deleted_user_is_rejected(client, factory, auth, db):
    user = factory.user()
    headers = auth(user)
    db.delete(user)
    db.commit()

    assert client.get("/groups/current", headers=headers).status_code == 401
